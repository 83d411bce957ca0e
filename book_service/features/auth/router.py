"""API router for the auth feature.

Endpoints:
    POST /auth/sign-up - Register and receive a token
    POST /auth/sign-in - Exchange credentials for a token
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from book_service.core.dependencies.database import get_db_session
from book_service.core.schemas import APIResponse
from book_service.features.auth.schemas import SignInRequest, SignUpRequest, TokenResponse
from book_service.features.auth.service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/sign-up",
    response_model=APIResponse[TokenResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create an account and return an access token for it.",
    responses={400: {"description": "Email already registered"}},
)
async def sign_up(
    payload: SignUpRequest,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> APIResponse[TokenResponse]:
    token = await AuthService(session).sign_up(payload)
    await session.commit()
    return APIResponse(message="User registered", data=token)


@router.post(
    "/sign-in",
    response_model=APIResponse[TokenResponse],
    summary="Sign in",
    description="Return an access token for valid email/password credentials.",
    responses={401: {"description": "Invalid credentials"}},
)
async def sign_in(
    payload: SignInRequest,
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> APIResponse[TokenResponse]:
    token = await AuthService(session).sign_in(payload)
    return APIResponse(data=token)
