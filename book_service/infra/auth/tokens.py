"""Signed JWT access tokens.

Tokens carry the user's email as ``sub`` and an ``exp`` claim. They are
signed with the shared HMAC secret from ``AuthSettings``.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Any

import jwt

from book_service.core.exceptions import TokenExpiredError, TokenInvalidError
from book_service.core.settings import get_auth_settings

if TYPE_CHECKING:
    from book_service.core.settings import AuthSettings


def create_access_token(email: str, *, settings: AuthSettings | None = None) -> str:
    """Create a signed access token for ``email``."""
    settings = settings or get_auth_settings()
    now = datetime.now(UTC)
    claims = {
        "sub": email,
        "iat": now,
        "exp": now + timedelta(minutes=settings.access_token_expire_minutes),
    }
    return jwt.encode(
        claims, settings.jwt_secret.get_secret_value(), algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str, *, settings: AuthSettings | None = None) -> dict[str, Any]:
    """Decode and validate an access token.

    Raises:
        TokenExpiredError: If the token is past its ``exp``.
        TokenInvalidError: If the signature, format or claims are wrong.
    """
    settings = settings or get_auth_settings()
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret.get_secret_value(),
            algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise TokenExpiredError() from None
    except jwt.InvalidTokenError:
        raise TokenInvalidError() from None

    if not isinstance(claims.get("sub"), str):
        raise TokenInvalidError(detail="Token subject is missing")
    return claims
