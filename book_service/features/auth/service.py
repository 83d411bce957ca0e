"""Service layer for the auth feature."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from book_service.core.exceptions import BadRequestException, InvalidCredentialsError
from book_service.features.auth.schemas import TokenResponse
from book_service.features.users.models import User
from book_service.features.users.repository import UserRepository, get_user_repository
from book_service.infra.auth import create_access_token, hash_password, verify_password

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from book_service.features.auth.schemas import SignInRequest, SignUpRequest

logger = logging.getLogger(__name__)


class AuthService:
    """Account registration and credential checks."""

    def __init__(
        self,
        session: AsyncSession,
        repo: UserRepository | None = None,
    ) -> None:
        self._session = session
        self._repo = repo or get_user_repository()

    async def sign_up(self, payload: SignUpRequest) -> TokenResponse:
        """Register a new account and sign it in.

        Raises:
            BadRequestException: If the email is already registered
        """
        if await self._repo.get_by_email(self._session, payload.email) is not None:
            raise BadRequestException(
                detail="User already exists",
                type="user-already-exists",
                extra={"email": payload.email},
            )

        user = await self._repo.create(
            self._session,
            User(
                email=payload.email,
                name=payload.name,
                hashed_password=hash_password(payload.password),
            ),
        )
        logger.info("User registered", extra={"user_id": user.id})
        return TokenResponse(access_token=create_access_token(user.email))

    async def sign_in(self, payload: SignInRequest) -> TokenResponse:
        """Exchange valid credentials for a token.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password is wrong
        """
        user = await self._repo.get_by_email(self._session, payload.email)
        if user is None or not verify_password(payload.password, user.hashed_password):
            logger.info("Sign-in rejected", extra={"email": payload.email})
            raise InvalidCredentialsError(payload.email)

        logger.info("User signed in", extra={"user_id": user.id})
        return TokenResponse(access_token=create_access_token(user.email))
