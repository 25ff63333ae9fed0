"""Exception handlers for the FastAPI application.

Every error leaves the API in one envelope::

    {"error_code": "...", "errors": [{"msg": "...", "param": "..." | null}]}
"""

from collections.abc import Sequence
from typing import Any

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import settings
from core.exceptions import AppException, ErrorCode

logger = structlog.get_logger()

# Location prefixes that carry no field information
_LOC_ROOTS = {"body", "query", "path", "header", "cookie"}


def field_errors(errors: Sequence[Any]) -> list[dict[str, str | None]]:
    """Convert pydantic error dicts into ``{msg, param}`` entries.

    ``param`` is the dotted field path without the request location, or
    ``None`` for errors that concern the whole body.
    """
    result: list[dict[str, str | None]] = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in _LOC_ROOTS:
            loc = loc[1:]
        msg = str(error.get("msg", "Invalid value"))
        if msg.startswith("Value error, "):
            msg = msg[len("Value error, ") :]
        result.append({"msg": msg, "param": ".".join(loc) or None})
    return result


def _envelope(error_code: str, errors: list[dict[str, str | None]]) -> dict[str, Any]:
    return {"error_code": error_code, "errors": errors}


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        """Handle custom application exceptions."""
        logger.warning(
            "app_exception",
            error_code=exc.error_code.value,
            message=exc.message,
            status_code=exc.status_code,
        )
        param = exc.details.get("param") if isinstance(exc.details, dict) else None
        return JSONResponse(
            status_code=exc.status_code,
            content=_envelope(exc.error_code.value, [{"msg": exc.message, "param": param}]),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Handle HTTP exceptions from FastAPI/Starlette."""
        return JSONResponse(
            status_code=exc.status_code,
            content=_envelope("HTTP_ERROR", [{"msg": str(exc.detail), "param": None}]),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle Pydantic validation errors as 400 with one entry per field."""
        errors = field_errors(exc.errors())
        logger.info("validation_error", errors=errors)
        return JSONResponse(
            status_code=400,
            content=_envelope(ErrorCode.VALIDATION_ERROR.value, errors),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Handle unexpected exceptions."""
        request_id = getattr(request.state, "request_id", "unknown")
        logger.error(
            "unhandled_exception",
            error=str(exc),
            error_type=type(exc).__name__,
            request_id=request_id,
            exc_info=True,
        )

        message = "Server error"
        if not settings.is_production:
            message = str(exc) or message

        return JSONResponse(
            status_code=500,
            content=_envelope(
                ErrorCode.INTERNAL_ERROR.value, [{"msg": message, "param": None}]
            ),
        )
