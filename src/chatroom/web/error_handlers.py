import structlog
from fastapi import Request
from fastapi.responses import JSONResponse, Response

from chatroom.errors import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    DependencyError,
    ExpiredTokenError,
    InvalidTokenError,
    ValidationError,
)

logger = structlog.get_logger(__name__)


def create_json_error_response(status_code: int, message: str) -> JSONResponse:
    """Create JSON error response in the uniform {ok: false, error} shape."""
    return JSONResponse(status_code=status_code, content={"ok": False, "error": message})


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    if isinstance(exc, AuthenticationError):
        status_code = 401
    elif isinstance(exc, ValidationError | ConflictError | InvalidTokenError | ExpiredTokenError):
        status_code = 400
    elif isinstance(exc, ConfigurationError | DependencyError):
        status_code = 500
    else:
        # Default for any other UserError subclass
        status_code = 400

    return create_json_error_response(status_code=status_code, message=str(exc))


async def request_validation_handler(_: Request, exc: Exception) -> Response:
    """Malformed request bodies and query parameters are reported as 400."""
    logger.debug("request_validation_failed", errors=str(exc))
    return create_json_error_response(status_code=400, message="Invalid request")


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("unexpected_error", error=str(exc))
    return create_json_error_response(status_code=500, message="An unexpected error occurred.")
