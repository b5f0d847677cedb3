"""Rate limiting for the unauthenticated auth endpoints.

Login and the two password reset endpoints are throttled per client address
to slow down credential stuffing and reset-mail flooding.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from idgate.core.config.settings import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)

AUTH_RATE_LIMIT = settings.RATE_LIMIT_AUTH


def get_limiter() -> Limiter:
    return limiter
