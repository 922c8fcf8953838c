"""
Application Errors and HTTP Translation

Every failure a handler can report is one of the classes below. Services
raise them where the problem is detected; ``register_exception_handlers``
turns them into ``{"error": "<message>"}`` JSON responses with the matching
status code.

    ValidationError  -> 400
    AuthError        -> 401
    NotFoundError    -> 404
    ConflictError    -> 409
    RateLimitError   -> 429
    InternalError    -> 500
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from wacdo.core.config import Settings

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors rendered as ``{"error": message}``."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input, bad identifier format."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid Data"


class InvalidIDError(ValidationError):
    default_message = "Invalid ID"


class AuthError(AppError):
    """Missing/invalid/expired token or bad credentials."""
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized Access"


class TokenMalformed(AuthError):
    default_message = "Token malformed"


class TokenExpired(AuthError):
    default_message = "Token expired"


class TokenInvalid(AuthError):
    default_message = "Token invalid"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    """Duplicate value within a uniqueness scope, or entity still referenced."""
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class RateLimitError(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    default_message = "Too Many Requests"


class InternalError(AppError):
    """Storage failure."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal Server Error"


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def register_exception_handlers(app: FastAPI, settings: Settings) -> None:
    """
    Install the JSON error handlers on ``app``.

    Args:
        app: FastAPI application
        settings: Used to decide whether unexpected errors expose details
    """

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return error_response(exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = exc.errors()
        logger.debug(f"Rejected payload on {request.url.path}: {errors}")
        if any(error.get("loc", ())[:1] == ("path",) for error in errors):
            return error_response(status.HTTP_400_BAD_REQUEST, InvalidIDError.default_message)
        return error_response(status.HTTP_400_BAD_REQUEST, ValidationError.default_message)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail)},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all exception handler."""
        logger.exception(f"Unhandled exception: {exc}")
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            str(exc) if settings.debug else "Internal Server Error",
        )
