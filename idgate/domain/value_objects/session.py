"""Session value objects."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SessionPrincipal:
    """The three fields a session maps its handle to."""

    user_id: int
    username: str
    is_sysadmin: bool

    def to_mapping(self) -> dict:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "is_sysadmin": self.is_sysadmin,
        }

    @classmethod
    def from_mapping(cls, data: dict) -> "SessionPrincipal":
        return cls(
            user_id=int(data["user_id"]),
            username=str(data["username"]),
            is_sysadmin=bool(data["is_sysadmin"]),
        )


@dataclass(frozen=True, slots=True)
class AuthenticatedSession:
    """Result of any successful authentication path.

    ``handle`` is the opaque session identifier handed back to the caller.
    """

    handle: str
    principal: SessionPrincipal
