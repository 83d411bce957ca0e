"""Unit tests for password hashing and access tokens."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from jwt.utils import base64url_encode

from book_service.core.exceptions import TokenExpiredError, TokenInvalidError
from book_service.core.settings import AuthSettings
from book_service.infra.auth import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)

SECRET = "unit-test-secret"


@pytest.fixture
def auth_settings() -> AuthSettings:
    return AuthSettings(jwt_secret=SECRET, access_token_expire_minutes=15)


@pytest.mark.unit
class TestPasswords:
    """Tests for bcrypt hashing through passlib."""

    def test_hash_is_not_plaintext(self):
        hashed = hash_password("s3cret-pass")

        assert hashed != "s3cret-pass"
        assert hashed.startswith("$2")

    def test_verify_roundtrip(self):
        hashed = hash_password("s3cret-pass")

        assert verify_password("s3cret-pass", hashed) is True
        assert verify_password("wrong-pass", hashed) is False

    def test_hashes_are_salted(self):
        assert hash_password("same") != hash_password("same")


@pytest.mark.unit
class TestAccessTokens:
    """Tests for JWT creation and validation."""

    def test_token_carries_email_and_expiry(self, auth_settings):
        token = create_access_token("reader@example.com", settings=auth_settings)

        claims = decode_access_token(token, settings=auth_settings)

        assert claims["sub"] == "reader@example.com"
        lifetime = claims["exp"] - claims["iat"]
        assert lifetime == 15 * 60

    def test_expired_token(self, auth_settings):
        past = datetime.now(UTC) - timedelta(hours=1)
        token = jwt.encode(
            {"sub": "reader@example.com", "iat": past, "exp": past + timedelta(minutes=5)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(TokenExpiredError):
            decode_access_token(token, settings=auth_settings)

    def test_wrong_secret(self, auth_settings):
        other = AuthSettings(jwt_secret="some-other-secret")
        token = create_access_token("reader@example.com", settings=other)

        with pytest.raises(TokenInvalidError):
            decode_access_token(token, settings=auth_settings)

    def test_tampered_payload(self, auth_settings):
        header, _, signature = create_access_token(
            "reader@example.com", settings=auth_settings
        ).split(".")
        forged_payload = base64url_encode(
            b'{"sub":"admin@example.com","exp":9999999999}'
        ).decode()

        with pytest.raises(TokenInvalidError):
            decode_access_token(f"{header}.{forged_payload}.{signature}", settings=auth_settings)

    def test_missing_subject(self, auth_settings):
        token = jwt.encode(
            {"exp": datetime.now(UTC) + timedelta(minutes=5)}, SECRET, algorithm="HS256"
        )

        with pytest.raises(TokenInvalidError):
            decode_access_token(token, settings=auth_settings)

    @pytest.mark.parametrize("token", ["", "not.a.jwt", "abc"])
    def test_garbage_token(self, auth_settings, token):
        with pytest.raises(TokenInvalidError):
            decode_access_token(token, settings=auth_settings)
