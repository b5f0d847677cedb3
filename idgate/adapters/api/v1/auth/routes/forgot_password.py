"""Forgot-password endpoint: issues a reset token and mails the reset link."""

import structlog
from fastapi import APIRouter, Depends, Request, status

from idgate.adapters.api.v1.auth.schemas import ForgotPasswordRequest, MessageResponse
from idgate.core.ratelimiter import AUTH_RATE_LIMIT, limiter
from idgate.domain.services.password_reset.password_reset_request_service import (
    PasswordResetRequestService,
)
from idgate.infrastructure.dependency_injection.auth_dependencies import (
    get_password_reset_request_service,
)

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Request a password reset email",
    responses={
        400: {"description": "Invalid email address"},
        403: {"description": "Password reset not allowed for this user"},
        404: {"description": "Unable to process the request"},
        502: {"description": "Reset email could not be sent"},
    },
)
@limiter.limit(AUTH_RATE_LIMIT)
async def forgot_password(
    request: Request,
    payload: ForgotPasswordRequest,
    reset_request_service: PasswordResetRequestService = Depends(get_password_reset_request_service),
) -> MessageResponse:
    await reset_request_service.request_password_reset(payload.email)
    return MessageResponse(status="reset_email_sent")
