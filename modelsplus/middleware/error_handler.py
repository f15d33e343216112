from __future__ import annotations

import logging
import traceback

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from modelsplus.api.envelope import err
from modelsplus.config.settings import get_settings

logger = logging.getLogger(__name__)


def _format_validation_error(exc: RequestValidationError) -> str:
    """Turn Pydantic validation errors into a readable message."""
    parts = []
    for err_entry in exc.errors():
        loc = err_entry.get("loc", ())
        loc_str = ".".join(str(x) for x in loc if x not in ("body", "query", "path"))
        msg = err_entry.get("msg", "Validation error")
        parts.append(f"{loc_str}: {msg}" if loc_str else msg)
    return "; ".join(parts) or "Request validation failed"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=err(message).model_dump())


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = _format_validation_error(exc)
    logger.warning("Validation error on %s %s: %s", request.method, request.url.path, message)
    return error_response(422, message)


class ServiceError(Exception):
    """Raise from the service layer for known user-facing errors."""


class CatalogUnavailableError(ServiceError):
    """No catalog snapshot has been loaded yet."""


def full_error_message(exc: Exception) -> str:
    """Return full exception details including traceback."""
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).strip()


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    status_code = 503 if isinstance(exc, CatalogUnavailableError) else 400
    return error_response(status_code, str(exc))


async def catch_all_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error in %s %s", request.method, request.url.path)
    if get_settings().app_env == "dev":
        return error_response(500, full_error_message(exc))
    return error_response(500, "Internal server error")
