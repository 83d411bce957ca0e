"""Password hashing and access token primitives."""

from book_service.infra.auth.passwords import hash_password, verify_password
from book_service.infra.auth.tokens import create_access_token, decode_access_token

__all__ = [
    "create_access_token",
    "decode_access_token",
    "hash_password",
    "verify_password",
]
