"""Authentication settings: JWT signing and password hashing."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .yaml_sources import create_yaml_source


class AuthSettings(BaseSettings):
    """Access token and password settings.

    Environment variables use AUTH_ prefix.
    Example: AUTH_JWT_SECRET=change-me, AUTH_ACCESS_TOKEN_EXPIRE_MINUTES=60
    """

    jwt_secret: SecretStr = Field(
        default=SecretStr("change-me-in-production"),
        description="HMAC secret used to sign access tokens",
    )
    jwt_algorithm: Literal["HS256", "HS384", "HS512"] = Field(
        default="HS256",
        description="JWT signing algorithm",
    )
    access_token_expire_minutes: int = Field(
        default=60,
        ge=1,
        le=60 * 24 * 30,
        description="Access token lifetime in minutes",
    )
    password_hash_rounds: int = Field(
        default=12,
        ge=4,
        le=31,
        description="bcrypt cost factor for stored password hashes",
    )

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
        env_ignore_empty=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Customize settings source precedence: init > yaml > env > dotenv > secrets."""
        return (
            init_settings,
            create_yaml_source(settings_cls, "auth"),
            env_settings,
            dotenv_settings,
            file_secret_settings,
        )
