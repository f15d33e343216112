from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

JSONRPC_VERSION = "2.0"

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603
RESOURCE_NOT_FOUND = -32002

RequestId = str | int | None


class MCPError(Exception):
    """A failure that is reported to the caller as a JSON-RPC error object."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            payload["data"] = self.data
        return payload


@dataclass
class JSONRPCRequest:
    method: str
    id: RequestId = None
    params: dict = field(default_factory=dict)
    is_notification: bool = False


def parse_request(message: Any) -> JSONRPCRequest:
    """Validate one JSON-RPC message; raises MCPError(INVALID_REQUEST)."""
    if not isinstance(message, dict):
        raise MCPError(INVALID_REQUEST, "Invalid Request: expected a JSON object")
    if message.get("jsonrpc") != JSONRPC_VERSION:
        raise MCPError(INVALID_REQUEST, "Invalid Request: jsonrpc must be '2.0'")
    method = message.get("method")
    if not isinstance(method, str) or not method:
        raise MCPError(INVALID_REQUEST, "Invalid Request: method must be a string")
    request_id = message.get("id")
    if request_id is not None and (
        isinstance(request_id, bool) or not isinstance(request_id, (str, int))
    ):
        raise MCPError(INVALID_REQUEST, "Invalid Request: id must be a string or number")
    params = message.get("params")
    if params is None:
        params = {}
    if not isinstance(params, dict):
        raise MCPError(INVALID_PARAMS, "Invalid params: expected an object")
    return JSONRPCRequest(
        method=method,
        id=request_id,
        params=params,
        is_notification="id" not in message,
    )


def request_id_of(message: Any) -> RequestId:
    """Best-effort id for error replies to messages that failed validation."""
    if isinstance(message, dict):
        value = message.get("id")
        if isinstance(value, (str, int)) and not isinstance(value, bool):
            return value
    return None


def success_response(request_id: RequestId, result: Any) -> dict:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def error_response(request_id: RequestId, error: MCPError) -> dict:
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error.to_dict()}


def text_content(text: str) -> dict:
    return {"type": "text", "text": text}
