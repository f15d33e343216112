"""JSON-RPC dispatch for the MCP surface.

The dispatcher is transport-free: it takes decoded JSON (one message or a
batch) and returns the decoded reply, or None when nothing should be sent
back. Every failure is turned into a JSON-RPC error object here.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from modelsplus.config.defaults import DEFAULT_PROTOCOL_VERSION, SUPPORTED_PROTOCOL_VERSIONS
from modelsplus.config.settings import AppSettings
from modelsplus.mcp.protocol_models import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    RESOURCE_NOT_FOUND,
    JSONRPCRequest,
    MCPError,
    error_response,
    parse_request,
    request_id_of,
    success_response,
)
from modelsplus.mcp.tools import CatalogResolver, ToolRegistry

logger = logging.getLogger(__name__)

INFO_RESOURCE_URI = "info://modelsplus-api"

_INFO_TEXT = """{name} MCP Server v{version}

This server provides access to AI model specifications and provider
information from a point-in-time snapshot of the models.dev database.

Available Tools:
- search_models: Search AI models by various criteria
- get_model: Get detailed information about a specific model
- search_providers: Search AI model providers
- get_provider: Get detailed information about a specific provider
"""


class MCPServer:
    def __init__(self, registry: ToolRegistry, settings: AppSettings) -> None:
        self.registry = registry
        self.settings = settings
        self._methods: dict[str, Callable[[dict, CatalogResolver], Any]] = {
            "initialize": self._initialize,
            "ping": lambda params, catalog: {},
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
            "resources/list": self._list_resources,
            "resources/read": self._read_resource,
        }

    def server_info(self) -> dict:
        return {"name": self.settings.app_name, "version": self.settings.server_version}

    def capabilities(self, protocol_version: str = DEFAULT_PROTOCOL_VERSION) -> dict:
        return {
            "protocolVersion": protocol_version,
            "capabilities": {"tools": {}, "resources": {}},
            "serverInfo": self.server_info(),
        }

    def handle_payload(self, payload: Any, catalog: CatalogResolver) -> dict | list | None:
        """Answer one decoded message or a batch of them."""
        if isinstance(payload, list):
            if not payload:
                return error_response(
                    None, MCPError(INVALID_REQUEST, "Invalid Request: empty batch")
                )
            replies = [self.handle_message(message, catalog) for message in payload]
            replies = [reply for reply in replies if reply is not None]
            return replies or None
        return self.handle_message(payload, catalog)

    def handle_message(self, message: Any, catalog: CatalogResolver) -> dict | None:
        try:
            request = parse_request(message)
        except MCPError as exc:
            return error_response(request_id_of(message), exc)

        if request.is_notification:
            # notifications/initialized and friends need no reply
            logger.debug("MCP notification %s", request.method)
            return None

        try:
            result = self._dispatch(request, catalog)
        except MCPError as exc:
            logger.warning("MCP %s failed: %s", request.method, exc.message)
            return error_response(request.id, exc)
        except Exception as exc:
            logger.exception("MCP %s crashed", request.method)
            return error_response(request.id, MCPError(INTERNAL_ERROR, "Internal error", str(exc)))
        return success_response(request.id, result)

    def _dispatch(self, request: JSONRPCRequest, catalog: CatalogResolver) -> Any:
        method = self._methods.get(request.method)
        if method is None:
            raise MCPError(METHOD_NOT_FOUND, f"Method not found: {request.method}")
        return method(request.params, catalog)

    def _initialize(self, params: dict, catalog: CatalogResolver) -> dict:
        requested = params.get("protocolVersion")
        if requested in SUPPORTED_PROTOCOL_VERSIONS:
            return self.capabilities(requested)
        return self.capabilities()

    def _list_tools(self, params: dict, catalog: CatalogResolver) -> dict:
        return {"tools": [tool.descriptor() for tool in self.registry.list_tools()]}

    def _call_tool(self, params: dict, catalog: CatalogResolver) -> dict:
        name = params.get("name")
        if not isinstance(name, str) or not name:
            raise MCPError(INVALID_PARAMS, "Invalid params: tool name is required")
        return self.registry.call(name, params.get("arguments"), catalog)

    def _list_resources(self, params: dict, catalog: CatalogResolver) -> dict:
        return {
            "resources": [
                {
                    "uri": INFO_RESOURCE_URI,
                    "name": "modelsplus-api-info",
                    "title": "ModelsPlus API Information",
                    "description": "Information about the ModelsPlus API and data sources",
                    "mimeType": "text/plain",
                }
            ]
        }

    def _read_resource(self, params: dict, catalog: CatalogResolver) -> dict:
        uri = params.get("uri")
        if uri != INFO_RESOURCE_URI:
            raise MCPError(RESOURCE_NOT_FOUND, f"Resource not found: {uri}")
        text = _INFO_TEXT.format(
            name=self.settings.app_name, version=self.settings.server_version
        )
        return {"contents": [{"uri": uri, "mimeType": "text/plain", "text": text}]}
