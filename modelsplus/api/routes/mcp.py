"""MCP over HTTP: JSON-RPC requests in, JSON-RPC replies out."""

import json

from fastapi import APIRouter, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse, Response

from modelsplus.config.defaults import DEFAULT_PROTOCOL_VERSION
from modelsplus.core.container import get_mcp_server
from modelsplus.core.store import get_snapshot
from modelsplus.mcp.protocol_models import (
    INTERNAL_ERROR,
    PARSE_ERROR,
    MCPError,
    error_response,
)
from modelsplus.mcp.server import MCPServer
from modelsplus.services.catalog_service import CatalogService

router = APIRouter(tags=["mcp"])

_NO_CACHE = {"Cache-Control": "no-cache"}


def _catalog_resolver():
    # One snapshot per HTTP request, shared by every message in a batch.
    snapshot = get_snapshot()

    def resolve() -> CatalogService:
        if snapshot is None:
            raise MCPError(INTERNAL_ERROR, "Catalog snapshot is not loaded")
        return CatalogService(snapshot)

    return resolve


def _respond(raw: bytes, server: MCPServer) -> Response:
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        return JSONResponse(
            status_code=400,
            content=error_response(None, MCPError(PARSE_ERROR, "Parse error", str(exc))),
            headers=_NO_CACHE,
        )
    reply = server.handle_payload(payload, _catalog_resolver())
    if reply is None:
        return Response(status_code=202)
    return JSONResponse(content=reply, headers=_NO_CACHE)


async def _handle(request: Request, server: MCPServer) -> Response:
    raw = await request.body()
    # Decoding, the query work and encoding stay off the event loop.
    return await run_in_threadpool(_respond, raw, server)


@router.post("/mcp")
async def mcp_endpoint(request: Request, server: MCPServer = Depends(get_mcp_server)):
    return await _handle(request, server)


@router.post("/mcp/http")
async def mcp_http_endpoint(request: Request, server: MCPServer = Depends(get_mcp_server)):
    return await _handle(request, server)


@router.get("/mcp")
def mcp_capabilities(server: MCPServer = Depends(get_mcp_server)):
    return JSONResponse(content=server.capabilities(), headers=_NO_CACHE)


@router.get("/.well-known/mcp")
def mcp_discovery(server: MCPServer = Depends(get_mcp_server)):
    return {
        **server.server_info(),
        "protocolVersion": DEFAULT_PROTOCOL_VERSION,
        "capabilities": server.capabilities()["capabilities"],
        "endpoints": {"mcp": "/mcp", "http": "/mcp/http"},
    }
