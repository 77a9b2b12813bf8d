"""
Unified exception hierarchy (single entry point)

- **Exception classes**: everything inherits `AppException(HTTPException)`, which keeps the
  HTTP `status_code` separate from the business `code` and carries extra detail in `data`.
- **Global handlers**: FastAPI handlers plus `register_exception_handlers`, so every error
  leaves the service in the `steam_openid.common.response.error_response` format.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from steam_openid.common.response import error_response
from steam_openid.core.settings import settings


class AppException(HTTPException):
    """Base application exception (business code should raise this or a subclass)"""

    code: int
    data: Any

    def __init__(
        self,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        message: str = "Internal Server Error",
        *,
        code: int | None = None,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        super().__init__(status_code=status_code, detail=message, headers=headers)
        self.code = status_code if code is None else code
        self.data = data


# Error response construction & global handlers


def create_error_response(*, status_code: int, code: int, message: str, data: Any = None) -> Response:
    """Build a unified error response (matches steam_openid.common.response.error_response)."""
    return JSONResponse(
        status_code=status_code,
        content=error_response(message=message, code=code, data=data),
    )


async def app_exception_handler(request: Request, exc: AppException) -> Response:
    """Handle application exceptions (AppException)."""
    return create_error_response(
        status_code=exc.status_code,
        code=getattr(exc, "code", exc.status_code),
        message=str(exc.detail),
        data=getattr(exc, "data", None),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> Response:
    """Handle FastAPI/Starlette HTTPException (not AppException)."""
    return create_error_response(
        status_code=exc.status_code,
        code=exc.status_code,
        message=str(exc.detail),
        data=getattr(exc, "data", None),
    )


def _format_validation_errors(errors: Iterable[Mapping[str, Any]]) -> List[dict[str, Any]]:
    formatted: List[dict[str, Any]] = []
    for err in errors:
        loc = err.get("loc", ())
        field_path = ".".join(str(x) for x in loc)
        formatted.append(
            {
                "field": field_path,
                "message": err.get("msg"),
                "type": err.get("type"),
            }
        )
    return formatted


async def request_validation_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle request validation errors (RequestValidationError / PydanticValidationError)."""
    errors: List[dict[str, Any]] = []
    if isinstance(exc, (RequestValidationError, PydanticValidationError)):
        errors = _format_validation_errors(exc.errors())

    return create_error_response(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        message="Request parameter validation failed",
        data={"validation_errors": errors} if errors else None,
    )


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle uncaught exceptions (500)."""
    logger.exception("Unhandled exception: {}", exc)

    debug = bool(settings.debug)
    return create_error_response(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        message=str(exc) if debug else "Internal Server Error",
        data={"error_type": type(exc).__name__} if debug else None,
    )


def register_exception_handlers(app: Any) -> None:
    """Register every exception handler on a FastAPI app."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(PydanticValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
