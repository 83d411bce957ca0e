"""Authentication dependencies.

Routes that need a signed-in user declare ``user: CurrentUser``. The
dependency reads ``Authorization: Bearer <token>``, validates the JWT and
loads the user named by its ``sub`` claim.

Example:
    @router.get("/me")
    async def read_me(user: CurrentUser) -> APIResponse[UserResponse]:
        return APIResponse(data=UserResponse.model_validate(user))
"""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from book_service.core.dependencies.database import get_db_session
from book_service.core.exceptions import MissingAuthenticationError, TokenInvalidError
from book_service.features.users.models import User
from book_service.features.users.repository import get_user_repository
from book_service.infra.auth import decode_access_token
from book_service.infra.logging import set_log_context

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False, description="JWT from /auth/sign-in")


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> User:
    """Resolve the bearer token to a user.

    Raises:
        MissingAuthenticationError: No bearer token was sent.
        TokenExpiredError: The token is past its expiry.
        TokenInvalidError: The token is malformed, forged, or its user is gone.
    """
    if credentials is None:
        raise MissingAuthenticationError()

    claims = decode_access_token(credentials.credentials)
    user = await get_user_repository().get_by_email(session, claims["sub"])
    if user is None:
        logger.info("Token subject has no account", extra={"subject": claims["sub"]})
        raise TokenInvalidError(detail="User no longer exists")

    set_log_context(user_id=user.id)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]
"""Authenticated user dependency (required)."""
