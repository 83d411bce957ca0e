"""Password hashing with passlib's bcrypt context."""

from __future__ import annotations

from functools import lru_cache

from passlib.context import CryptContext

from book_service.core.settings import get_auth_settings


@lru_cache(maxsize=4)
def _context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def get_password_context() -> CryptContext:
    """Password context using the configured bcrypt cost."""
    return _context(get_auth_settings().password_hash_rounds)


def hash_password(password: str) -> str:
    """Hash a plain password for storage."""
    return get_password_context().hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored hash."""
    return get_password_context().verify(plain_password, hashed_password)
