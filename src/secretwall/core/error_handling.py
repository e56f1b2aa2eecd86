"""Error handling and exception handlers for secretwall.

Maps the exception taxonomy onto HTTP responses: validation failures and store
failures become JSON bodies with a ``message``, while authentication failures
and missing sessions become redirects to the login page.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import structlog
from litestar import Response
from litestar.response import Redirect
from litestar.status_codes import (
    HTTP_400_BAD_REQUEST,
    HTTP_409_CONFLICT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)

if TYPE_CHECKING:
    from litestar import Request
    from litestar.exceptions import HTTPException, ValidationException

    from secretwall.exceptions import AuthenticationError, NotAuthenticatedError, ValidationError

logger = structlog.get_logger(__name__)

LOGIN_PATH = "/login"
INTERNAL_ERROR_MESSAGE = "Internal server error"


@dataclass
class ErrorResponse:
    """Structured error response format."""

    message: str
    code: str = "internal_error"
    correlation_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON response."""
        result: dict[str, Any] = {"message": self.message, "code": self.code}
        if self.correlation_id:
            result["correlation_id"] = self.correlation_id
        return result


def get_correlation_id(request: Request) -> str | None:
    """Extract correlation ID from request state or headers."""
    correlation_id = request.scope.get("state", {}).get("correlation_id")
    if correlation_id:
        return correlation_id
    return request.headers.get("X-Correlation-ID") or request.headers.get("X-Request-ID")


def error_response(request: Request, message: str, code: str, status_code: int) -> Response[dict[str, Any]]:
    """Build a JSON error response."""
    body = ErrorResponse(message=message, code=code, correlation_id=get_correlation_id(request))
    return Response(content=body.to_dict(), status_code=status_code, media_type="application/json")


def email_taken_handler(request: Request, exc: ValidationError) -> Response[dict[str, Any]]:
    """Handle EmailTakenError: duplicate registration is a conflict."""
    logger.warning("Email already registered", path=request.url.path)
    return error_response(request, str(exc), "email_taken", HTTP_409_CONFLICT)


def validation_error_handler(request: Request, exc: ValidationError) -> Response[dict[str, Any]]:
    """Handle domain validation errors other than duplicate email."""
    logger.warning("Validation error", path=request.url.path, error=str(exc))
    return error_response(request, str(exc), "validation_error", HTTP_400_BAD_REQUEST)


def request_validation_handler(request: Request, exc: ValidationException) -> Response[dict[str, Any]]:
    """Handle malformed or incomplete form submissions."""
    logger.warning("Request validation failed", path=request.url.path, detail=str(exc.detail))
    return error_response(request, "Invalid form data", "bad_request", HTTP_400_BAD_REQUEST)


def authentication_error_handler(request: Request, exc: AuthenticationError) -> Redirect:
    """Send failed logins back to the login page. The reason is only logged."""
    logger.info("Authentication failed", path=request.url.path, reason=type(exc).__name__, detail=str(exc))
    return Redirect(path=LOGIN_PATH)


def not_authenticated_handler(request: Request, exc: NotAuthenticatedError) -> Redirect:
    """Send anonymous requests for protected pages to the login page."""
    logger.debug("Login required", path=request.url.path)
    return Redirect(path=LOGIN_PATH)


def storage_error_handler(request: Request, exc: Exception) -> Response[dict[str, Any]]:
    """Handle store failures with a generic 500; the detail stays in the logs."""
    logger.error(
        "Storage error",
        path=request.url.path,
        method=request.method,
        exc_info=exc,
    )
    return error_response(request, INTERNAL_ERROR_MESSAGE, "storage_error", HTTP_500_INTERNAL_SERVER_ERROR)


def http_exception_handler(request: Request, exc: HTTPException) -> Response[dict[str, Any]]:
    """Handle framework HTTP exceptions (404, 405, ...) as JSON."""
    log_level = "warning" if exc.status_code < 500 else "error"
    getattr(logger, log_level)("HTTP exception", path=request.url.path, status_code=exc.status_code)
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return error_response(request, message, "http_error", exc.status_code)


def generic_exception_handler(request: Request, exc: Exception) -> Response[dict[str, Any]]:
    """Handle unexpected exceptions with a generic error response.

    Logs the full exception but returns a safe message to the client.
    """
    logger.exception(
        "Unhandled exception",
        path=request.url.path,
        method=request.method,
        exc_info=exc,
    )
    return error_response(request, INTERNAL_ERROR_MESSAGE, "internal_error", HTTP_500_INTERNAL_SERVER_ERROR)


def get_exception_handlers() -> dict:
    """Get all exception handlers for the application.

    Returns:
        Dictionary mapping exception types to handler functions. Litestar picks
        the handler registered for the closest class in the exception's MRO.
    """
    from litestar.exceptions import HTTPException, ValidationException

    from secretwall.exceptions import (
        AuthenticationError,
        EmailTakenError,
        NotAuthenticatedError,
        StorageError,
        ValidationError,
    )

    return {
        ValidationException: request_validation_handler,
        HTTPException: http_exception_handler,
        EmailTakenError: email_taken_handler,
        ValidationError: validation_error_handler,
        AuthenticationError: authentication_error_handler,
        NotAuthenticatedError: not_authenticated_handler,
        StorageError: storage_error_handler,
        Exception: generic_exception_handler,
    }
