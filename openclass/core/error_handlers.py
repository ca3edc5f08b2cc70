# openclass/core/error_handlers.py
"""Single boundary that turns failures into the wire error envelope."""
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging

from .exceptions import AppError, ErrorKind

logger = logging.getLogger(__name__)


def _request_context(request: Request) -> dict:
    return {
        "method": request.method,
        "url": str(request.url),
        "ip": request.client.host if request.client else None,
        "user_agent": request.headers.get("user-agent"),
    }


def _respond(error: AppError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_envelope())


async def app_error_handler(request: Request, exc: AppError):
    """Handle classified application errors"""
    context = _request_context(request)
    if exc.kind is ErrorKind.INTERNAL:
        logger.error(f"Application error: {exc.message} - {context}")
    else:
        logger.warning(f"{exc.code}: {exc.message} - {context}")
    return _respond(exc)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Map request validation failures to VALIDATION_ERROR with field details"""
    details = [
        {
            "field": ".".join(str(part) for part in err.get("loc", ()) if part != "body"),
            "message": err.get("msg", ""),
        }
        for err in exc.errors()
    ]
    logger.warning(f"Validation error: {details} - {_request_context(request)}")
    return _respond(AppError(ErrorKind.VALIDATION, details=details))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Classify framework HTTP errors (unknown routes, wrong methods)"""
    kind = ErrorKind.from_status(exc.status_code)
    message = exc.detail if isinstance(exc.detail, str) and exc.status_code < 500 else None
    logger.warning(f"HTTP {exc.status_code}: {exc.detail} - {_request_context(request)}")
    status_code = exc.status_code if kind is ErrorKind.INTERNAL else None
    return _respond(AppError(kind, message, status_code=status_code))


async def general_exception_handler(request: Request, exc: Exception):
    """Handle unclassified exceptions without leaking internals"""
    logger.error(
        f"Unexpected error: {exc!r} - {_request_context(request)}",
        exc_info=(type(exc), exc, exc.__traceback__),
    )
    return _respond(AppError(ErrorKind.INTERNAL))


def register_error_handlers(app: FastAPI):
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
