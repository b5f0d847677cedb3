"""Reset-password endpoint: redeems a reset token with a new password."""

from fastapi import APIRouter, Depends, Request, status

from idgate.adapters.api.v1.auth.schemas import MessageResponse, ResetPasswordRequest
from idgate.core.ratelimiter import AUTH_RATE_LIMIT, limiter
from idgate.domain.services.password_reset.password_reset_service import PasswordResetService
from idgate.infrastructure.dependency_injection.auth_dependencies import (
    get_password_reset_service,
)

router = APIRouter()


@router.post(
    "",
    response_model=MessageResponse,
    status_code=status.HTTP_200_OK,
    summary="Set a new password with a reset token",
)
@limiter.limit(AUTH_RATE_LIMIT)
async def reset_password(
    request: Request,
    payload: ResetPasswordRequest,
    reset_service: PasswordResetService = Depends(get_password_reset_service),
) -> MessageResponse:
    await reset_service.reset_password(payload.reset_uuid, payload.password)
    return MessageResponse(status="password_reset")
