"""Response payloads for the authentication endpoints."""

from pydantic import BaseModel

from idgate.domain.value_objects.session import SessionPrincipal


class SessionOut(BaseModel):
    user_id: int
    username: str
    is_sysadmin: bool

    @classmethod
    def from_principal(cls, principal: SessionPrincipal) -> "SessionOut":
        return cls(
            user_id=principal.user_id,
            username=principal.username,
            is_sysadmin=principal.is_sysadmin,
        )


class MessageResponse(BaseModel):
    status: str


class ExistsResponse(BaseModel):
    exists: bool
