"""Identity availability check used by sign-up forms."""

from typing import Literal

from fastapi import APIRouter, Depends, Query

from idgate.adapters.api.v1.auth.schemas import ExistsResponse
from idgate.domain.entities.user import UserQuery
from idgate.domain.interfaces.repositories import IUserRepository
from idgate.infrastructure.dependency_injection.auth_dependencies import get_user_repository

router = APIRouter()


@router.get("", response_model=ExistsResponse, summary="Check whether an identity is taken")
async def user_exists(
    target: Literal["username", "email", "realname"] = Query(...),
    value: str = Query(..., max_length=255),
    user_repository: IUserRepository = Depends(get_user_repository),
) -> ExistsResponse:
    query = UserQuery(**{target: value})
    return ExistsResponse(exists=await user_repository.exists(query, target))
