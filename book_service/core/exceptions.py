"""Application exceptions rendered as RFC 7807 problem details."""

from __future__ import annotations

from typing import Any

_DEFAULT_TITLES = {
    400: "Bad Request",
    401: "Unauthorized",
    404: "Not Found",
    409: "Conflict",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
    503: "Service Unavailable",
}


class AppException(Exception):
    """Base application exception.

    ``app.exception_handlers`` turns every subclass into a problem response
    using the attributes below.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Problem type slug, e.g. ``invalid-cursor``.
        title: Short summary; derived from the status code when omitted.
        instance: URI of this occurrence, usually filled in by the handler.
        extra: Extra members merged into the problem body.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or _DEFAULT_TITLES.get(status_code, "Error")
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)


class BadRequestException(AppException):
    """The request is well-formed JSON but cannot be honoured.

    Example:
        raise BadRequestException("User already exists", type="user-already-exists")
    """

    def __init__(self, detail: str, type: str = "bad-request", **kwargs: Any) -> None:
        super().__init__(400, detail, type=type, title="Bad Request", **kwargs)


class UnauthorizedException(AppException):
    """Authentication failed or is missing."""

    def __init__(self, detail: str, type: str = "unauthorized", **kwargs: Any) -> None:
        super().__init__(401, detail, type=type, title="Unauthorized", **kwargs)


class InvalidCursorFormatError(BadRequestException):
    """A pagination cursor could not be decoded.

    Raised before any data is fetched, so a tampered or truncated cursor
    never reaches the database.
    """

    def __init__(self, cursor: str | None = None, reason: str | None = None) -> None:
        super().__init__(
            "Invalid cursor format",
            type="invalid-cursor",
            extra={"reason": reason} if reason else None,
        )
        self.cursor = cursor
        self.reason = reason


# Authentication


class MissingAuthenticationError(UnauthorizedException):
    def __init__(self, detail: str = "Authentication credentials required") -> None:
        super().__init__(detail, type="missing-authentication")


class TokenExpiredError(UnauthorizedException):
    def __init__(self, detail: str = "Token has expired") -> None:
        super().__init__(detail, type="token-expired")


class TokenInvalidError(UnauthorizedException):
    """Malformed, forged, or pointing at a user that no longer exists."""

    def __init__(self, detail: str = "Invalid token") -> None:
        super().__init__(detail, type="token-invalid")


class InvalidCredentialsError(UnauthorizedException):
    """Email/password mismatch. The message never says which half was wrong."""

    def __init__(self, login: str | None = None, detail: str = "Invalid credentials") -> None:
        super().__init__(
            detail,
            type="invalid-credentials",
            extra={"login": login} if login else None,
        )


__all__ = [
    "AppException",
    "BadRequestException",
    "InvalidCredentialsError",
    "InvalidCursorFormatError",
    "MissingAuthenticationError",
    "TokenExpiredError",
    "TokenInvalidError",
    "UnauthorizedException",
]
