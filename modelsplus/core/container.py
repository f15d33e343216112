from __future__ import annotations

from dataclasses import dataclass

from modelsplus.mcp.server import MCPServer
from modelsplus.mcp.tools import ToolRegistry


@dataclass
class AppContainer:
    """App-scoped runtime container."""

    tool_registry: ToolRegistry
    mcp_server: MCPServer


_container: AppContainer | None = None


def set_container(container: AppContainer | None) -> None:
    global _container
    _container = container


def get_container() -> AppContainer | None:
    return _container


def get_mcp_server() -> MCPServer:
    container = get_container()
    if container is None:
        raise RuntimeError("AppContainer is not initialized")
    return container.mcp_server
