import copy

import pytest
from fastapi.testclient import TestClient

from modelsplus.catalog.loader import build_snapshot
from modelsplus.config.settings import get_settings
from modelsplus.core.store import set_snapshot
from modelsplus.main import create_app
from modelsplus.services.catalog_service import CatalogService

PROVIDERS = [
    {
        "id": "openai",
        "name": "OpenAI",
        "env": ["OPENAI_API_KEY"],
        "npm": "@ai-sdk/openai",
        "doc": "https://platform.openai.com/docs/models",
    },
    {
        "id": "anthropic",
        "name": "Anthropic",
        "env": ["ANTHROPIC_API_KEY"],
        "npm": "@ai-sdk/anthropic",
        "doc": "https://docs.anthropic.com/en/docs/about-claude/models",
    },
    {
        "id": "google",
        "name": "Google",
        "env": ["GOOGLE_GENERATIVE_AI_API_KEY", "GEMINI_API_KEY"],
        "npm": "@ai-sdk/google",
    },
    {
        "id": "local",
        "name": "Local Runner",
        "env": [],
        "api": "http://localhost:11434/v1",
    },
]

MODELS = [
    {
        "id": "openai:gpt-4o",
        "provider": "openai",
        "name": "GPT-4o",
        "release_date": "2024-05-13",
        "last_updated": "2024-08-06",
        "attachment": True,
        "reasoning": False,
        "temperature": True,
        "tool_call": True,
        "open_weights": False,
        "knowledge": "2023-09",
        "cost": {"input": 2.5, "output": 10, "cache_read": 1.25},
        "limit": {"context": 128000, "output": 16384},
        "modalities": {"input": ["text", "image"], "output": ["text"]},
    },
    {
        "id": "openai:o1-mini",
        "provider": "openai",
        "name": "o1-mini",
        "release_date": "2024-09-12",
        "last_updated": "2024-09-12",
        "attachment": False,
        "reasoning": True,
        "temperature": False,
        "tool_call": False,
        "open_weights": False,
        "cost": {"input": 1.1, "output": 4.4},
        "limit": {"context": 128000, "output": 65536},
        "modalities": {"input": ["text"], "output": ["text"]},
    },
    {
        "id": "openai:whisper",
        "provider": "openai",
        "release_date": "2022-09-21",
        "modalities": {"input": ["audio"], "output": ["text"]},
    },
    {
        "id": "anthropic:claude-sonnet-4",
        "provider": "anthropic",
        "name": "Claude Sonnet 4",
        "release_date": "2025-05-22",
        "last_updated": "2025-05-22",
        "attachment": True,
        "reasoning": True,
        "temperature": True,
        "tool_call": True,
        "open_weights": False,
        "cost": {"input": 3, "output": 15, "cache_read": 0.3, "cache_write": 3.75},
        "limit": {"context": 200000, "output": 64000},
        "modalities": {"input": ["text", "image", "pdf"], "output": ["text"]},
    },
    {
        "id": "google:gemini-2.5-flash",
        "provider": "google",
        "name": "Gemini 2.5 Flash",
        "release_date": "2025-03-20",
        "last_updated": "2025-06-05",
        "attachment": True,
        "reasoning": True,
        "temperature": True,
        "tool_call": True,
        "open_weights": False,
        "cost": {"input": 0.3, "output": 2.5},
        "limit": {"context": 1048576, "output": 65536},
        "modalities": {
            "input": ["text", "image", "audio", "video", "pdf"],
            "output": ["text"],
        },
    },
    {
        "id": "local:tiny-llama",
        "provider": "local",
        "name": "Tiny Llama",
        "release_date": "2024-01",
        "attachment": False,
        "reasoning": False,
        "temperature": True,
        "tool_call": False,
        "open_weights": True,
        "limit": {"context": 2048},
        "modalities": {"input": ["text"], "output": ["text"]},
    },
]

# Ids in name order (case-folded name, falling back to id).
NAME_ORDER = [
    "anthropic:claude-sonnet-4",
    "google:gemini-2.5-flash",
    "openai:gpt-4o",
    "openai:o1-mini",
    "openai:whisper",
    "local:tiny-llama",
]


def make_snapshot(models=None, providers=None):
    return build_snapshot(
        copy.deepcopy(MODELS if models is None else models),
        copy.deepcopy(PROVIDERS if providers is None else providers),
    )


@pytest.fixture
def snapshot():
    return make_snapshot()


@pytest.fixture
def catalog(snapshot) -> CatalogService:
    return CatalogService(snapshot)


@pytest.fixture
def client(snapshot):
    get_settings.cache_clear()
    set_snapshot(snapshot)
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
    set_snapshot(None)
    get_settings.cache_clear()
