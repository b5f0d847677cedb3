"""Repository interfaces for the authentication domain.

The credential store is the serialization point for every concurrent write:
uniqueness is enforced by the store's constraints, never by an application
level check-then-insert.
"""

from abc import ABC, abstractmethod
from typing import Optional

from idgate.domain.entities.user import NewUser, User, UserQuery


class IUserRepository(ABC):
    """Interface for the durable record of users."""

    @abstractmethod
    async def register(self, new_user: NewUser) -> int:
        """Insert a user, hashing the supplied password with a fresh salt.

        Returns:
            int: The store-assigned user id.

        Raises:
            DuplicateIdentityError: If username or email is already taken.
        """
        raise NotImplementedError

    @abstractmethod
    async def exists(self, user: UserQuery, field: str) -> bool:
        """Report whether a user matches ``user`` on the single field ``field``.

        ``field`` is one of ``username``, ``email`` or ``realname``.

        Raises:
            InvalidQueryError: If username, email and realname are all empty,
                or ``field`` is not a supported target.
        """
        raise NotImplementedError

    @abstractmethod
    async def lookup(self, criteria: UserQuery) -> Optional[User]:
        """Return the user matching every populated field of ``criteria``.

        Raises:
            InvalidQueryError: If no field of ``criteria`` is populated.
        """
        raise NotImplementedError

    @abstractmethod
    async def lookup_by_principal(self, principal: str) -> Optional[User]:
        """Return the user whose username or email equals ``principal``."""
        raise NotImplementedError

    @abstractmethod
    async def set_reset_token(self, user_id: int, token: str) -> None:
        """Store ``token`` as the user's outstanding reset token, replacing any older one."""
        raise NotImplementedError

    @abstractmethod
    async def reset_password(self, user_id: int, token: str, new_password: str) -> bool:
        """Re-salt and re-hash the password and clear the reset token in one write.

        The write only applies while ``token`` is still the user's outstanding
        token.

        Returns:
            bool: False when the token was already consumed or rotated.
        """
        raise NotImplementedError

    @abstractmethod
    async def update_password(self, user_id: int, new_password: str) -> None:
        """Re-salt and re-hash the password of ``user_id``."""
        raise NotImplementedError

    @abstractmethod
    async def onboard(self, user: NewUser) -> User:
        """Create the user if no user with the same username exists, else reuse it.

        Idempotent: concurrent or repeated calls for one username leave exactly
        one row.
        """
        raise NotImplementedError
