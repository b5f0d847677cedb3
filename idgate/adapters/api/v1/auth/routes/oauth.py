"""OAuth authorization code callback.

The provider redirects the browser here with ``code``; on success the user
gets a session cookie and is sent to the application root.
"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import RedirectResponse

from idgate.adapters.api.v1.auth.utils import set_session_cookie
from idgate.domain.services.authentication.oauth_service import OAuthAuthenticationService
from idgate.infrastructure.dependency_injection.auth_dependencies import get_oauth_service

router = APIRouter()


@router.get("/callback", summary="Complete an OAuth login")
async def oauth_callback(
    code: str = Query(""),
    oauth_service: OAuthAuthenticationService = Depends(get_oauth_service),
) -> RedirectResponse:
    session = await oauth_service.authenticate(code)
    response = RedirectResponse(url="/", status_code=status.HTTP_302_FOUND)
    set_session_cookie(response, session.handle)
    return response
