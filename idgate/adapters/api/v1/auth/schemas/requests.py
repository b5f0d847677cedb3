"""Request payloads for the authentication endpoints.

Payloads only constrain shape; content rules (email syntax, blank tokens)
are enforced by the domain services so every caller gets the same errors.
"""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    principal: str = Field(..., description="Username or email address", max_length=255)
    password: str = Field(..., max_length=1024)


class ForgotPasswordRequest(BaseModel):
    email: str = Field(..., max_length=255)


class ResetPasswordRequest(BaseModel):
    reset_uuid: str = Field(..., max_length=64)
    password: str = Field(..., max_length=1024)
