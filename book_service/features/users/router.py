"""API router for the users feature.

Endpoints:
    GET /users/me - Profile of the authenticated user
"""

from __future__ import annotations

from fastapi import APIRouter

from book_service.core.dependencies.auth import CurrentUser
from book_service.core.schemas import APIResponse
from book_service.features.users.schemas import UserResponse

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "/me",
    response_model=APIResponse[UserResponse],
    summary="Current user",
    description="Return the account the bearer token belongs to.",
    responses={401: {"description": "Missing or invalid token"}},
)
async def read_me(user: CurrentUser) -> APIResponse[UserResponse]:
    return APIResponse(data=UserResponse.model_validate(user))
