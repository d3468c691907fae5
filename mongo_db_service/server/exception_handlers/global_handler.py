"""
Exception Handlers for the FastAPI Application.

This module maps service errors, request validation failures and unexpected
exceptions to ``ApiError`` JSON bodies, logging each one with its request
context.
"""

import traceback
from typing import Any, Dict, Iterable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from mongo_db_service.core.errors import DuplicateResourceError, ResourceNotFoundError
from mongo_db_service.core.logging_config import get_logger
from mongo_db_service.core.models.io.responses import ApiError

logger = get_logger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"


def _error_response(status_code: int, message: str, request: Request) -> JSONResponse:
    body = ApiError.of(status_code, message, request.url.path)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def format_validation_errors(errors: Iterable[Dict[str, Any]]) -> str:
    """Join validation errors as ``field: message`` pairs.

    The location prefix (``body``, ``query``, ``path``) is dropped; errors
    without a field (e.g. malformed JSON) keep their bare message.
    """
    parts = []
    for error in errors:
        loc = [str(item) for item in error.get("loc", ()) if item not in ("body", "query", "path")]
        message = error.get("msg", "Invalid value")
        parts.append(f"{'.'.join(loc)}: {message}" if loc else message)
    return ", ".join(parts)


async def not_found_handler(request: Request, exc: ResourceNotFoundError) -> JSONResponse:
    logger.error(f"Resource not found: {exc}")
    return _error_response(status.HTTP_404_NOT_FOUND, str(exc), request)


async def duplicate_handler(request: Request, exc: DuplicateResourceError) -> JSONResponse:
    logger.warning(f"Duplicate resource: {exc}")
    return _error_response(status.HTTP_409_CONFLICT, str(exc), request)


async def validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = format_validation_errors(exc.errors())
    logger.warning(f"Validation failed on {request.method} {request.url.path}: {message}")
    return _error_response(status.HTTP_400_BAD_REQUEST, message, request)


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    logger.warning(f"Illegal argument: {exc}")
    return _error_response(status.HTTP_400_BAD_REQUEST, str(exc), request)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler to log detailed error information.

    This handler is called for any unhandled exception in the application.
    It logs the full error context under an error ID and returns a generic
    ``ApiError`` body so internal details never reach the client.

    Args:
        request: The HTTP request that caused the exception
        exc: The exception that was raised

    Returns:
        JSONResponse with status 500
    """
    error_id = id(exc)

    logger.error(
        f"Unhandled exception [{error_id}] in {request.method} {request.url.path}: {str(exc)}",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client": request.client.host if request.client else "unknown",
            "error_type": type(exc).__name__,
            "traceback": "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
        },
    )

    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE, request)


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(ResourceNotFoundError, not_found_handler)
    app.add_exception_handler(DuplicateResourceError, duplicate_handler)
    app.add_exception_handler(RequestValidationError, validation_handler)
    app.add_exception_handler(ValueError, value_error_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
