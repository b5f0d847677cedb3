"""Authentication API schemas."""

# flake8: noqa: F401

from .requests import ForgotPasswordRequest, LoginRequest, ResetPasswordRequest
from .responses import ExistsResponse, MessageResponse, SessionOut

__all__ = [
    "LoginRequest",
    "ForgotPasswordRequest",
    "ResetPasswordRequest",
    "SessionOut",
    "MessageResponse",
    "ExistsResponse",
]
