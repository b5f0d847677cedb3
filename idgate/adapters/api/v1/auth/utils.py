"""Session cookie helpers shared by the login and OAuth routes."""

from starlette.responses import Response

from idgate.core.config.settings import settings


def set_session_cookie(response: Response, handle: str) -> None:
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=handle,
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        secure=settings.EXT_ENDPOINT.startswith("https://"),
        samesite="lax",
    )


def clear_session_cookie(response: Response) -> None:
    response.delete_cookie(key=settings.SESSION_COOKIE_NAME)
