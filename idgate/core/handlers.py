"""
Global exception handlers for the FastAPI application.

Translates the idgate exception hierarchy into HTTP responses. Every response
body is ``{"detail": <message>, "code": <code>}``; messages are the
caller-safe text carried by the exception.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded
from starlette import status
from structlog import get_logger

from idgate.core.exceptions import (
    BadRequestError,
    ConfigurationError,
    DatabaseError,
    DuplicateIdentityError,
    ForbiddenError,
    IdgateError,
    InvalidQueryError,
    InvalidTokenError,
    UnauthorizedError,
    UpstreamError,
    UserNotFoundError,
)

__all__ = ["STATUS_BY_EXCEPTION", "idgate_error_handler", "register_exception_handlers"]

logger = get_logger(__name__)

# Most specific first; the first matching class wins.
STATUS_BY_EXCEPTION = (
    (InvalidQueryError, status.HTTP_400_BAD_REQUEST),
    (BadRequestError, status.HTTP_400_BAD_REQUEST),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (InvalidTokenError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (UserNotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateIdentityError, status.HTTP_409_CONFLICT),
    (UpstreamError, status.HTTP_502_BAD_GATEWAY),
    (DatabaseError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (ConfigurationError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: IdgateError) -> int:
    for exc_type, status_code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def idgate_error_handler(request: Request, exc: IdgateError) -> JSONResponse:
    """Handles every `IdgateError` subclass.

    Server-side failures are logged at error level, caller errors at warning.
    """
    status_code = status_for(exc)
    log = logger.error if status_code >= 500 else logger.warning
    log(
        "Request failed",
        error=exc.code,
        status_code=status_code,
        client_ip=request.client.host if request.client else None,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content={"detail": exc.message, "code": exc.code})


def register_exception_handlers(app: FastAPI) -> None:
    """Registers the custom exception handlers with the FastAPI application."""
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
    app.add_exception_handler(IdgateError, idgate_error_handler)
