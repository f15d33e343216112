"""The four catalog tools exposed over MCP.

Each tool pairs a hand-written input schema (the public contract returned by
``tools/list``) with a strict pydantic model that validates call arguments
before anything touches the catalog. Handlers translate arguments into the
same :class:`QueryOptions` the HTTP routes build, so both surfaces select
identical records for identical criteria.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from modelsplus.config.settings import AppSettings
from modelsplus.engine import PROVIDER_FILTER_PARAMS, QueryOptions
from modelsplus.mcp.protocol_models import (
    INVALID_PARAMS,
    METHOD_NOT_FOUND,
    RESOURCE_NOT_FOUND,
    MCPError,
    text_content,
)
from modelsplus.services.catalog_service import CatalogService


class _ToolArgs(BaseModel):
    # A string where a boolean is declared is a caller error, not a filter to drop.
    model_config = ConfigDict(strict=True, extra="ignore")


class SearchModelsArgs(_ToolArgs):
    q: str | None = None
    provider: str | None = None
    tool_call: bool | None = None
    attachment: bool | None = None
    reasoning: bool | None = None
    temperature: bool | None = None
    open_weights: bool | None = None
    min_input_cost: float | None = None
    max_input_cost: float | None = None
    min_output_cost: float | None = None
    max_output_cost: float | None = None
    min_context: float | None = None
    max_context: float | None = None
    min_output_limit: float | None = None
    max_output_limit: float | None = None
    modalities: str | list[str] | None = None
    release_after: str | None = None
    release_before: str | None = None
    updated_after: str | None = None
    updated_before: str | None = None
    sort: str | None = None
    order: str | None = None
    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)
    fields: str | list[str] | None = None


class LookupArgs(_ToolArgs):
    id: str = Field(min_length=1)


class SearchProvidersArgs(_ToolArgs):
    q: str | None = None
    env: str | None = None
    npm: str | None = None
    limit: int | None = Field(default=None, ge=0)
    offset: int | None = Field(default=None, ge=0)


def _str(description: str) -> dict:
    return {"type": "string", "description": description}


def _bool(description: str) -> dict:
    return {"type": "boolean", "description": description}


def _num(description: str) -> dict:
    return {"type": "number", "description": description}


def _str_list(description: str) -> dict:
    # Accepted as "a,b" or ["a", "b"].
    return {
        "oneOf": [
            {"type": "string"},
            {"type": "array", "items": {"type": "string"}},
        ],
        "description": description,
    }


def _search_models_schema(default_limit: int) -> dict:
    return {
        "type": "object",
        "properties": {
            "q": _str("Search query (model name, provider, etc.)"),
            "provider": _str("Filter by provider (e.g., openai, anthropic)"),
            "tool_call": _bool("Filter by tool calling support"),
            "attachment": _bool("Filter by attachment support"),
            "reasoning": _bool("Filter by reasoning capabilities"),
            "temperature": _bool("Filter by temperature control support"),
            "open_weights": _bool("Filter by open weights availability"),
            "min_input_cost": _num("Minimum input cost"),
            "max_input_cost": _num("Maximum input cost"),
            "min_output_cost": _num("Minimum output cost"),
            "max_output_cost": _num("Maximum output cost"),
            "min_context": _num("Minimum context window"),
            "max_context": _num("Maximum context window"),
            "min_output_limit": _num("Minimum output token limit"),
            "max_output_limit": _num("Maximum output token limit"),
            "modalities": _str_list(
                "Modalities the model must all support, comma separated or a list "
                "(e.g., image,text)"
            ),
            "release_after": _str("Released on or after this date (YYYY-MM-DD)"),
            "release_before": _str("Released on or before this date (YYYY-MM-DD)"),
            "updated_after": _str("Updated on or after this date (YYYY-MM-DD)"),
            "updated_before": _str("Updated on or before this date (YYYY-MM-DD)"),
            "sort": _str(
                "Sort key: name, provider, release_date, last_updated, "
                "cost_input, cost_output, context_limit, output_limit"
            ),
            "order": {"type": "string", "enum": ["asc", "desc"], "description": "Sort direction"},
            "limit": {
                "type": "integer",
                "minimum": 0,
                "default": default_limit,
                "description": "Maximum number of results",
            },
            "offset": {"type": "integer", "minimum": 0, "description": "Number of results to skip"},
            "fields": _str_list("Fields to return, comma separated or a list"),
        },
        "required": [],
    }


def _search_providers_schema(default_limit: int) -> dict:
    return {
        "type": "object",
        "properties": {
            "q": _str("Search query (provider name)"),
            "env": _str("Filter by required environment variable"),
            "npm": _str("Filter by npm package name"),
            "limit": {
                "type": "integer",
                "minimum": 0,
                "default": default_limit,
                "description": "Maximum number of results",
            },
            "offset": {"type": "integer", "minimum": 0, "description": "Number of results to skip"},
        },
        "required": [],
    }


def _lookup_schema(description: str) -> dict:
    return {
        "type": "object",
        "properties": {"id": _str(description)},
        "required": ["id"],
    }


def _dump(value: Any) -> str:
    return json.dumps(value, indent=2)


ToolHandler = Callable[[Any, CatalogService], dict]
CatalogResolver = Callable[[], CatalogService]


@dataclass
class CatalogTool:
    name: str
    title: str
    description: str
    input_schema: dict
    args_model: type[_ToolArgs]
    handler: ToolHandler

    def descriptor(self) -> dict:
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "inputSchema": self.input_schema,
        }

    def call(self, arguments: Any, catalog: CatalogResolver) -> dict:
        """Validate ``arguments`` and only then resolve the catalog and run."""
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise MCPError(INVALID_PARAMS, f"Invalid arguments for {self.name}: expected an object")
        try:
            args = self.args_model.model_validate(arguments)
        except ValidationError as exc:
            raise MCPError(
                INVALID_PARAMS,
                f"Invalid arguments for {self.name}",
                data=[
                    {"loc": ".".join(str(x) for x in e["loc"]), "msg": e["msg"]}
                    for e in exc.errors()
                ],
            ) from exc
        return self.handler(args, catalog())


def _search_models_handler(default_limit: int) -> ToolHandler:
    def handler(args: SearchModelsArgs, catalog: CatalogService) -> dict:
        options = QueryOptions.from_params(
            args.model_dump(exclude_none=True), default_limit=default_limit
        )
        models = catalog.search_models(options)
        return {
            "content": [text_content(f"Found {len(models)} AI models:\n\n{_dump(models)}")],
            "structuredContent": {"models": models},
        }

    return handler


def _get_model(args: LookupArgs, catalog: CatalogService) -> dict:
    model = catalog.get_model(args.id)
    if model is None:
        raise MCPError(RESOURCE_NOT_FOUND, f"AI model with ID '{args.id}' not found")
    return {
        "content": [text_content(f"AI model details for {args.id}:\n\n{_dump(model)}")],
        "structuredContent": model,
    }


def _search_providers_handler(default_limit: int) -> ToolHandler:
    def handler(args: SearchProvidersArgs, catalog: CatalogService) -> dict:
        options = QueryOptions.from_params(
            args.model_dump(exclude_none=True),
            filter_names=PROVIDER_FILTER_PARAMS,
            default_limit=default_limit,
        )
        providers = catalog.search_providers(options)
        return {
            "content": [
                text_content(f"Found {len(providers)} AI model providers:\n\n{_dump(providers)}")
            ],
            "structuredContent": {"providers": providers},
        }

    return handler


def _get_provider(args: LookupArgs, catalog: CatalogService) -> dict:
    provider = catalog.get_provider(args.id)
    if provider is None:
        raise MCPError(
            RESOURCE_NOT_FOUND, f"AI model provider with ID '{args.id}' not found"
        )
    return {
        "content": [
            text_content(f"AI model provider details for {args.id}:\n\n{_dump(provider)}")
        ],
        "structuredContent": provider,
    }


class ToolRegistry:
    def __init__(self) -> None:
        self._tools: dict[str, CatalogTool] = {}

    def register(self, tool: CatalogTool) -> None:
        self._tools[tool.name] = tool

    def get_tool(self, name: str) -> CatalogTool | None:
        return self._tools.get(name)

    def list_tools(self) -> list[CatalogTool]:
        """Tools in registration order."""
        return list(self._tools.values())

    def call(self, name: Any, arguments: Any, catalog: CatalogResolver) -> dict:
        tool = self.get_tool(name) if isinstance(name, str) else None
        if tool is None:
            raise MCPError(METHOD_NOT_FOUND, f"Unknown tool: {name}")
        return tool.call(arguments, catalog)


def build_tool_registry(settings: AppSettings) -> ToolRegistry:
    registry = ToolRegistry()
    registry.register(
        CatalogTool(
            name="search_models",
            title="Search Models",
            description="Search for AI models by name, provider, or capabilities",
            input_schema=_search_models_schema(settings.default_models_limit),
            args_model=SearchModelsArgs,
            handler=_search_models_handler(settings.default_models_limit),
        )
    )
    registry.register(
        CatalogTool(
            name="get_model",
            title="Get Model",
            description="Get detailed information about a specific AI model",
            input_schema=_lookup_schema("Model ID (e.g., openai:gpt-4o)"),
            args_model=LookupArgs,
            handler=_get_model,
        )
    )
    registry.register(
        CatalogTool(
            name="search_providers",
            title="Search Providers",
            description="Search for AI model providers by name or environment variables",
            input_schema=_search_providers_schema(settings.default_providers_limit),
            args_model=SearchProvidersArgs,
            handler=_search_providers_handler(settings.default_providers_limit),
        )
    )
    registry.register(
        CatalogTool(
            name="get_provider",
            title="Get Provider",
            description="Get detailed information about a specific AI model provider",
            input_schema=_lookup_schema("Provider ID"),
            args_model=LookupArgs,
            handler=_get_provider,
        )
    )
    return registry
