import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from modelsplus.api.routes.admin import router as admin_router
from modelsplus.api.routes.mcp import router as mcp_router
from modelsplus.api.routes.models import router as models_router
from modelsplus.api.routes.providers import router as providers_router
from modelsplus.api.routes.search import router as search_router
from modelsplus.catalog.loader import SnapshotLoadError
from modelsplus.config.settings import get_settings
from modelsplus.core.container import AppContainer, set_container
from modelsplus.core.store import get_snapshot
from modelsplus.mcp.server import MCPServer
from modelsplus.mcp.tools import build_tool_registry
from modelsplus.middleware.error_handler import (
    ServiceError,
    catch_all_handler,
    service_error_handler,
    validation_error_handler,
)
from modelsplus.services.snapshot_service import refresh_snapshot
from modelsplus.utils.dates import utc_now_iso

logger = logging.getLogger(__name__)


def _configure_app_logging(level: str) -> None:
    """Ensure modelsplus.* logs are visible under the same sink as uvicorn error logs."""
    app_logger = logging.getLogger("modelsplus")
    uvicorn_error_logger = logging.getLogger("uvicorn.error")

    if uvicorn_error_logger.handlers:
        app_logger.handlers = list(uvicorn_error_logger.handlers)
        app_logger.setLevel(uvicorn_error_logger.level or level)
        app_logger.propagate = False
        return

    if not app_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(levelname)s:     %(name)s - %(message)s")
        )
        app_logger.addHandler(handler)
    app_logger.setLevel(level)
    app_logger.propagate = False


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    _configure_app_logging(settings.log_level.upper())

    # Snapshot is loaded once before serving; an already installed one is kept.
    if get_snapshot() is None:
        try:
            refresh_snapshot(settings)
        except SnapshotLoadError:
            logger.error("Could not load the catalog snapshot", exc_info=True)
            raise

    yield


def create_app() -> FastAPI:
    settings = get_settings()
    app = FastAPI(title=settings.app_name, version=settings.server_version, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        max_age=86400,
    )

    registry = build_tool_registry(settings)
    container = AppContainer(tool_registry=registry, mcp_server=MCPServer(registry, settings))
    app.state.container = container
    set_container(container)

    # Register error handlers
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, catch_all_handler)

    app.include_router(models_router)
    app.include_router(providers_router)
    app.include_router(search_router)
    app.include_router(mcp_router)
    app.include_router(admin_router)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {
            "status": "healthy",
            "timestamp": utc_now_iso(),
            "server": settings.app_name,
            "version": settings.server_version,
        }

    return app


app = create_app()
