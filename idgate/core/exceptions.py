"""Centralized exception hierarchy for idgate.

Each exception carries a machine-readable `code` for programmatic handling and
a human-readable `message` that is safe to show to the caller. One subclass
exists per failure kind of the authentication core; `idgate.core.handlers`
maps them to HTTP status codes.
"""

from typing import Final

__all__: Final = [
    "IdgateError",
    "InvalidQueryError",
    "UnauthorizedError",
    "UserNotFoundError",
    "ForbiddenError",
    "BadRequestError",
    "DuplicateIdentityError",
    "UpstreamError",
    "InvalidTokenError",
    "DatabaseError",
    "EmailServiceError",
    "ConfigurationError",
    "GENERIC_LOGIN_FAILURE",
    "GENERIC_RESET_FAILURE",
]

# Caller-visible messages that must not reveal which check failed.
GENERIC_LOGIN_FAILURE: Final = "Invalid username/email or password."
GENERIC_RESET_FAILURE: Final = "Unable to process the password reset request."


class IdgateError(Exception):
    """Base exception class for all custom errors in idgate.

    Attributes:
        message (str): A human-readable error message.
        code (str): A unique, machine-readable error code.
    """

    message: str
    code: str = "generic_error"

    def __init__(self, message: str, code: str = "generic_error"):
        self.message = message
        self.code = code
        Exception.__init__(self, self.message)

    def __str__(self) -> str:
        return self.message


# ---------------------------------------------------------------------------
# Request / query errors (typically map to 400 Bad Request)
# ---------------------------------------------------------------------------


class InvalidQueryError(IdgateError):
    """Raised when an identity lookup names no identity field at all.

    An unconstrained lookup is a programming error, not "not found".
    """

    def __init__(self, message: str = "Identity lookup requires at least one identity field.",
                 code: str = "invalid_query"):
        super().__init__(message, code)


class BadRequestError(IdgateError):
    """Raised when a required field is missing or malformed."""

    def __init__(self, message: str, code: str = "bad_request"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Auth-related errors
# ---------------------------------------------------------------------------


class UnauthorizedError(IdgateError):
    """Raised when local credentials do not verify.

    The message never distinguishes an unknown principal from a wrong
    password. Maps to `401 Unauthorized`.
    """

    def __init__(self, message: str = GENERIC_LOGIN_FAILURE, code: str = "unauthorized"):
        super().__init__(message, code)


class InvalidTokenError(IdgateError):
    """Raised when a provider token fails signature, algorithm or claim checks."""

    def __init__(self, message: str = "The identity provider token is invalid.",
                 code: str = "invalid_token"):
        super().__init__(message, code)


class ForbiddenError(IdgateError):
    """Raised when an operation is not permitted under the current auth mode."""

    def __init__(self, message: str = "Forbidden", code: str = "forbidden"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# Lookup / persistence errors
# ---------------------------------------------------------------------------


class UserNotFoundError(IdgateError):
    """Raised when no user matches a lookup or a reset token.

    Where enumeration matters the message stays generic. Maps to `404`.
    """

    def __init__(self, message: str = "User not found", code: str = "user_not_found"):
        super().__init__(message, code)


class DuplicateIdentityError(IdgateError):
    """Raised when the store rejects a create because username or email is taken.

    Maps to a `409 Conflict`.
    """

    def __init__(self, message: str = "A user with this username or email already exists.",
                 code: str = "duplicate_identity"):
        super().__init__(message, code)


class DatabaseError(IdgateError):
    """Wraps low-level credential store failures. Maps to `500`."""

    def __init__(self, message: str, code: str = "database_error"):
        super().__init__(message, code)


# ---------------------------------------------------------------------------
# External collaborator errors
# ---------------------------------------------------------------------------


class UpstreamError(IdgateError):
    """Raised when the identity provider or another network peer fails.

    Never retried automatically. Maps to `502 Bad Gateway`.
    """

    def __init__(self, message: str, code: str = "upstream_error"):
        super().__init__(message, code)


class EmailServiceError(UpstreamError):
    """Raised when a notification cannot be dispatched."""

    def __init__(self, message: str, code: str = "email_service_error"):
        super().__init__(message, code)


class ConfigurationError(IdgateError):
    """Raised when a flow is invoked without the configuration it needs."""

    def __init__(self, message: str, code: str = "configuration_error"):
        super().__init__(message, code)
