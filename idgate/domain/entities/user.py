from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel
from sqlalchemy import Boolean, DateTime, String
from sqlmodel import Column, Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(SQLModel, table=True):
    """Represents a User entity, the single source of truth for identity and credentials.

    Local registration and OAuth onboarding both create rows here; password
    reset and login read and mutate the same credential fields.

    Attributes:
        id: Store-assigned identifier. Assigned once at insert, never reused.
        username: Unique login name. OAuth users get the token subject.
        email: Unique address, nullable. OAuth users get ``subject@issuer``.
        realname: Display name; some directory backends store an external UID here.
        comment: Free-form note.
        hashed_password: One-way hash of the password mixed with ``salt``.
            Null for users that cannot authenticate locally.
        salt: Per-user random salt, regenerated on every password write.
        sysadmin_flag: Grants elevated session privileges.
        reset_uuid: Outstanding single-use reset token, if any.
        creation_time: Set at insert.
        update_time: Set at insert and on every mutation.
    """

    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    username: str = Field(sa_column=Column(String(255), unique=True, nullable=False))
    email: Optional[str] = Field(
        default=None, sa_column=Column(String(255), unique=True, nullable=True)
    )
    realname: str = Field(default="", max_length=255)
    comment: str = Field(default="", max_length=255)
    hashed_password: Optional[str] = Field(default=None, max_length=255)
    salt: Optional[str] = Field(default=None, max_length=64)
    sysadmin_flag: bool = Field(
        default=False, sa_column=Column(Boolean, nullable=False, default=False)
    )
    reset_uuid: Optional[str] = Field(default=None, max_length=64, index=True)
    creation_time: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )
    update_time: datetime = Field(
        default_factory=utcnow,
        sa_column=Column(DateTime(timezone=True), nullable=False),
    )

    @property
    def is_sysadmin(self) -> bool:
        return bool(self.sysadmin_flag)

    @property
    def has_local_credentials(self) -> bool:
        return bool(self.hashed_password and self.salt)


class NewUser(BaseModel):
    """Registration input. ``password`` is plaintext and is hashed before it is stored."""

    username: str
    email: Optional[str] = None
    realname: str = ""
    comment: str = ""
    password: Optional[str] = None
    sysadmin_flag: bool = False


class UserQuery(BaseModel):
    """Lookup criteria for the credential store.

    Every populated field must match. A query with no field set is rejected by
    the store with ``InvalidQueryError``.
    """

    user_id: Optional[int] = None
    username: Optional[str] = None
    email: Optional[str] = None
    realname: Optional[str] = None
    reset_uuid: Optional[str] = None

    def is_empty(self) -> bool:
        return self.user_id is None and not any(
            (self.username, self.email, self.realname, self.reset_uuid)
        )
