"""Logout endpoint: destroys the session named by the session cookie."""

from fastapi import APIRouter, Depends, Request, Response, status

from idgate.adapters.api.v1.auth.schemas import MessageResponse
from idgate.adapters.api.v1.auth.utils import clear_session_cookie
from idgate.core.config.settings import settings
from idgate.domain.services.authentication.user_authentication_service import (
    UserAuthenticationService,
)
from idgate.infrastructure.dependency_injection.auth_dependencies import (
    get_user_authentication_service,
)

router = APIRouter()


@router.post("", response_model=MessageResponse, status_code=status.HTTP_200_OK, summary="Logout")
async def logout_user(
    request: Request,
    response: Response,
    auth_service: UserAuthenticationService = Depends(get_user_authentication_service),
) -> MessageResponse:
    handle = request.cookies.get(settings.SESSION_COOKIE_NAME)
    if handle:
        await auth_service.logout(handle)
    clear_session_cookie(response)
    return MessageResponse(status="logged_out")
