"""Eligibility rule for self-service password reset."""

from typing import Optional

from idgate.core.config.auth import AuthMode
from idgate.core.config.settings import Settings
from idgate.domain.entities.user import User


def is_user_resettable(user: Optional[User], settings: Settings) -> bool:
    """Return True if ``user`` may reset their password under ``settings``.

    In ``db_auth`` mode every user may. Under an external directory only the
    configured bootstrap administrator may, since nobody else has a local
    password to reset.
    """
    if user is None:
        return False
    if settings.AUTH_MODE == AuthMode.DB_AUTH:
        return True
    bootstrap = settings.BOOTSTRAP_ADMIN_USERNAME
    return bool(bootstrap) and user.username == bootstrap
