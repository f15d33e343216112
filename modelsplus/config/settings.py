from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

from modelsplus import __version__
from modelsplus.config.defaults import (
    DEFAULT_MODELS_LIMIT,
    DEFAULT_PROVIDERS_LIMIT,
    DEFAULT_SUGGESTION_LIMIT,
    SERVER_NAME,
)


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    app_env: str = "dev"
    app_name: str = SERVER_NAME
    server_version: str = __version__
    data_dir: str = "./data"
    source_dir: str | None = None  # models.dev checkout; used when data_dir has no snapshot
    cors_origins: list[str] = ["*"]
    default_models_limit: int = DEFAULT_MODELS_LIMIT
    default_providers_limit: int = DEFAULT_PROVIDERS_LIMIT
    suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT
    log_level: str = "INFO"


@lru_cache(maxsize=1)
def get_settings() -> AppSettings:
    return AppSettings()
