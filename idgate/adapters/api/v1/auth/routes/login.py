"""Login endpoint.

Authenticates a username or email with a password and hands the session
handle back as an HTTP-only cookie. All credential logic lives in
``UserAuthenticationService``.
"""

import structlog
from fastapi import APIRouter, Depends, Request, Response, status

from idgate.adapters.api.v1.auth.schemas import LoginRequest, SessionOut
from idgate.adapters.api.v1.auth.utils import set_session_cookie
from idgate.core.ratelimiter import AUTH_RATE_LIMIT, limiter
from idgate.domain.services.authentication.user_authentication_service import (
    UserAuthenticationService,
)
from idgate.infrastructure.dependency_injection.auth_dependencies import (
    get_user_authentication_service,
)

logger = structlog.get_logger(__name__)
router = APIRouter()


@router.post(
    "",
    response_model=SessionOut,
    status_code=status.HTTP_200_OK,
    summary="Authenticate with local credentials",
    responses={401: {"description": "Invalid username/email or password"}},
)
@limiter.limit(AUTH_RATE_LIMIT)
async def login_user(
    request: Request,
    response: Response,
    payload: LoginRequest,
    auth_service: UserAuthenticationService = Depends(get_user_authentication_service),
) -> SessionOut:
    session = await auth_service.login(payload.principal, payload.password)
    set_session_cookie(response, session.handle)
    return SessionOut.from_principal(session.principal)
