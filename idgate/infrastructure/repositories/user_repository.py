"""User Repository implementation using SQLAlchemy.

This module is the credential store: the durable record of users behind the
``IUserRepository`` interface. Every write that carries a plaintext password
derives a fresh salt and hash before it reaches the database, and every
uniqueness guarantee is delegated to the table's constraints so that
concurrent writers are serialized by the database itself.
"""

from typing import Dict, Optional

from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from idgate.core.exceptions import (
    BadRequestError,
    DatabaseError,
    DuplicateIdentityError,
    InvalidQueryError,
    UserNotFoundError,
)
from idgate.core.logging import mask
from idgate.domain.entities.user import NewUser, User, UserQuery, utcnow
from idgate.domain.interfaces.repositories import IUserRepository
from idgate.utils.security import DEFAULT_PBKDF2_ROUNDS, generate_salt, hash_password

logger = get_logger(__name__)

# Targets accepted by ``exists``.
EXISTS_TARGETS: Dict[str, object] = {
    "username": User.username,
    "email": User.email,
    "realname": User.realname,
}


class UserRepository(IUserRepository):
    """SQLAlchemy implementation of the credential store.

    Each mutating call commits its own transaction and rolls back on failure.
    Lookups bypass the session identity map so a caller always sees the last
    committed credential state.
    """

    def __init__(self, db_session: AsyncSession, pbkdf2_rounds: int = DEFAULT_PBKDF2_ROUNDS):
        self.db_session = db_session
        self.pbkdf2_rounds = pbkdf2_rounds

    def _hash(self, plaintext: str) -> tuple[str, str]:
        salt = generate_salt()
        return hash_password(plaintext, salt, rounds=self.pbkdf2_rounds), salt

    async def register(self, new_user: NewUser) -> int:
        """Insert a new user and return its store-assigned id.

        Raises:
            BadRequestError: If the username is blank
            DuplicateIdentityError: If username or email violates a unique constraint
            DatabaseError: On any other store failure
        """
        if not new_user.username or not new_user.username.strip():
            raise BadRequestError("Username is required.")

        hashed_password, salt = (None, None)
        if new_user.password:
            hashed_password, salt = self._hash(new_user.password)

        now = utcnow()
        user = User(
            username=new_user.username,
            email=new_user.email or None,
            realname=new_user.realname,
            comment=new_user.comment,
            hashed_password=hashed_password,
            salt=salt,
            sysadmin_flag=new_user.sysadmin_flag,
            creation_time=now,
            update_time=now,
        )

        try:
            self.db_session.add(user)
            await self.db_session.flush()
            user_id = user.id
            await self.db_session.commit()
        except IntegrityError as e:
            await self.db_session.rollback()
            logger.warning(
                "Duplicate identity on register",
                username=mask(new_user.username),
                email=mask(new_user.email),
                operation="register",
            )
            raise DuplicateIdentityError() from e
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(
                "Error registering user",
                username=mask(new_user.username),
                error=str(e),
                error_type=type(e).__name__,
                operation="register",
            )
            raise DatabaseError("Failed to register user.") from e

        logger.info("User registered", user_id=user_id, username=mask(new_user.username))
        return user_id

    async def exists(self, user: UserQuery, field: str) -> bool:
        if not (user.username or user.email or user.realname):
            logger.warning("Rejected exists query with blank identity fields", target=field)
            raise InvalidQueryError("User name, email, and realname are blank.")

        column = EXISTS_TARGETS.get(field)
        if column is None:
            raise InvalidQueryError(f"Unsupported identity field: {field}")
        value = getattr(user, field)
        if not value:
            raise InvalidQueryError(f"No value supplied for identity field: {field}")

        try:
            result = await self.db_session.execute(select(User.id).where(column == value).limit(1))
            found = result.first() is not None
        except SQLAlchemyError as e:
            logger.error("Error checking identity", target=field, error=str(e), operation="exists")
            raise DatabaseError("Failed to check identity.") from e

        logger.debug("Identity existence check", target=field, value=mask(value), found=found)
        return found

    async def lookup(self, criteria: UserQuery) -> Optional[User]:
        if criteria.is_empty():
            logger.warning("Rejected unconstrained user lookup")
            raise InvalidQueryError()

        statement = select(User).execution_options(populate_existing=True)
        if criteria.user_id is not None:
            statement = statement.where(User.id == criteria.user_id)
        if criteria.username:
            statement = statement.where(User.username == criteria.username)
        if criteria.email:
            statement = statement.where(User.email == criteria.email)
        if criteria.realname:
            statement = statement.where(User.realname == criteria.realname)
        if criteria.reset_uuid:
            statement = statement.where(User.reset_uuid == criteria.reset_uuid)

        try:
            result = await self.db_session.execute(statement)
            user = result.scalars().first()
        except SQLAlchemyError as e:
            logger.error("Error looking up user", error=str(e), operation="lookup")
            raise DatabaseError("Failed to look up user.") from e

        logger.debug("User lookup completed", found=user is not None, operation="lookup")
        return user

    async def lookup_by_principal(self, principal: str) -> Optional[User]:
        if not principal or not principal.strip():
            raise InvalidQueryError("Principal is blank.")

        statement = (
            select(User)
            .where(or_(User.username == principal, User.email == principal))
            .execution_options(populate_existing=True)
        )
        try:
            result = await self.db_session.execute(statement)
            candidates = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Error looking up principal", error=str(e), operation="lookup_by_principal")
            raise DatabaseError("Failed to look up user.") from e

        # A username match wins over an email match on another row.
        for candidate in candidates:
            if candidate.username == principal:
                return candidate
        return candidates[0] if candidates else None

    async def set_reset_token(self, user_id: int, token: str) -> None:
        if not token:
            raise BadRequestError("Reset token cannot be empty.")

        statement = (
            update(User)
            .where(User.id == user_id)
            .values(reset_uuid=token, update_time=utcnow())
        )
        rowcount = await self._execute_update(statement, "set_reset_token", user_id)
        if rowcount == 0:
            raise UserNotFoundError()
        logger.info("Reset token stored", user_id=user_id)

    async def reset_password(self, user_id: int, token: str, new_password: str) -> bool:
        if not new_password:
            raise BadRequestError("Password is required.")

        hashed_password, salt = self._hash(new_password)
        statement = (
            update(User)
            .where(User.id == user_id, User.reset_uuid == token)
            .values(
                hashed_password=hashed_password,
                salt=salt,
                reset_uuid=None,
                update_time=utcnow(),
            )
        )
        rowcount = await self._execute_update(statement, "reset_password", user_id)
        if rowcount == 0:
            logger.warning("Reset token no longer outstanding", user_id=user_id)
            return False
        logger.info("Password reset", user_id=user_id)
        return True

    async def update_password(self, user_id: int, new_password: str) -> None:
        if not new_password:
            raise BadRequestError("Password is required.")

        hashed_password, salt = self._hash(new_password)
        statement = (
            update(User)
            .where(User.id == user_id)
            .values(hashed_password=hashed_password, salt=salt, update_time=utcnow())
        )
        rowcount = await self._execute_update(statement, "update_password", user_id)
        if rowcount == 0:
            raise UserNotFoundError()
        logger.info("Password updated", user_id=user_id)

    async def onboard(self, user: NewUser) -> User:
        if not user.username:
            raise BadRequestError("Username is required for onboarding.")

        existing = await self.lookup(UserQuery(username=user.username))
        if existing is not None:
            logger.info("Onboarding reused existing user", user_id=existing.id)
            return existing

        now = utcnow()
        record = User(
            username=user.username,
            email=user.email or None,
            realname=user.realname or user.username,
            comment=user.comment,
            sysadmin_flag=user.sysadmin_flag,
            creation_time=now,
            update_time=now,
        )
        try:
            self.db_session.add(record)
            await self.db_session.flush()
            await self.db_session.commit()
        except IntegrityError as e:
            await self.db_session.rollback()
            # Lost a race with a concurrent onboard of the same username.
            existing = await self.lookup(UserQuery(username=user.username))
            if existing is not None:
                logger.info("Onboarding reused concurrently created user", user_id=existing.id)
                return existing
            logger.warning("Onboarding identity conflicts with another user", email=mask(user.email))
            raise DuplicateIdentityError() from e
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error("Error onboarding user", error=str(e), operation="onboard")
            raise DatabaseError("Failed to onboard user.") from e

        logger.info("Onboarded new user", user_id=record.id, username=mask(record.username))
        return record

    async def _execute_update(self, statement, operation: str, user_id: int) -> int:
        try:
            result = await self.db_session.execute(statement)
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            logger.error(
                "Error updating user",
                user_id=user_id,
                error=str(e),
                error_type=type(e).__name__,
                operation=operation,
            )
            raise DatabaseError("Failed to update user.") from e
        return result.rowcount
