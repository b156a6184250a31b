"""Error Handlers — global exception handlers for the user API.

Invariants:
    - UserApiError → structured JSON with error code, message, severity
    - RequestValidationError → 400 with field-level error details
    - A malformed dob anywhere in the request yields the dob-specific message
    - Unexpected faults are not handled here (RecoveryMiddleware owns them)

Design Decisions:
    - Two registered handlers plus a shared internal-error envelope used by the
      recovery middleware, so every failure body has the same shape
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from userapi.core.domain_types import DOB_FORMAT_MESSAGE
from userapi.core.errors import UserApiError, ErrorCategory, ErrorSeverity

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_user_api_error_handler(app)
    _register_validation_error_handler(app)


def _register_user_api_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(UserApiError)
    async def user_api_error_handler(request: Request, exc: UserApiError):
        """Handle user API errors that escaped route-level mapping."""
        logger.error(
            f"UserApiError: {exc.message}",
            extra={"error_code": exc.code, "path": request.url.path},
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"error_code": "VALIDATION_ERROR"},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=build_validation_error_response(exc),
        )


def build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    errors = exc.errors()
    message = "Invalid request data"
    if any(e["type"] == "dob_format" for e in errors):
        message = DOB_FORMAT_MESSAGE
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": message,
            "category": ErrorCategory.VALIDATION.value,
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in errors
            ],
        },
    }


def build_internal_error_response() -> dict:
    """Generic 500 body — never leaks internal details."""
    return {
        "error": {
            "code": "INTERNAL_ERROR",
            "message": "An unexpected error occurred",
            "category": ErrorCategory.INTERNAL.value,
            "severity": ErrorSeverity.CRITICAL.value,
        },
    }
