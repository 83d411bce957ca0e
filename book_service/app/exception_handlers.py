"""Global exception handlers for FastAPI application.

Every error leaves the API as an RFC 7807 problem document:

    {"type": "invalid-cursor", "title": "Bad Request", "status": 400,
     "detail": "Invalid cursor format", "instance": "...", "request_id": "..."}
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from book_service.core.database import InvalidFilterError, NotFoundError
from book_service.core.exceptions import AppException
from book_service.core.schemas.error import (
    ProblemDetail,
    ValidationError,
    ValidationProblemDetail,
)

logger = logging.getLogger(__name__)

# SQLSTATE codes (PostgreSQL) and message fragments (SQLite)
_UNIQUE_SQLSTATE = "23505"
_FOREIGN_KEY_SQLSTATE = "23503"


def _get_request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _create_problem_detail(
    status_code: int,
    detail: str,
    type_: str = "about:blank",
    title: str | None = None,
    instance: str | None = None,
    extra: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Create RFC 7807 Problem Details response.

    Args:
        status_code: HTTP status code.
        detail: Human-readable error description.
        type_: Error type identifier.
        title: Short human-readable summary.
        instance: URI identifying this occurrence.
        extra: Additional context information.

    Returns:
        Dictionary representing the problem detail.
    """
    problem = ProblemDetail(
        type=type_,
        title=title or ProblemDetail.default_title(status_code),
        status=status_code,
        detail=detail,
        instance=instance,
    )

    response_data = problem.model_dump(exclude_none=True)
    if extra:
        response_data.update(extra)
    return response_data


def _problem_response(
    request: Request,
    status_code: int,
    detail: str,
    type_: str,
    *,
    title: str | None = None,
    instance: str | None = None,
    extra: dict[str, Any] | None = None,
) -> JSONResponse:
    problem_data = _create_problem_detail(
        status_code=status_code,
        detail=detail,
        type_=type_,
        title=title,
        instance=instance or str(request.url),
        extra=extra,
    )
    request_id = _get_request_id(request)
    if request_id:
        problem_data["request_id"] = request_id
    return JSONResponse(status_code=status_code, content=problem_data)


def classify_integrity_error(exc: IntegrityError) -> str | None:
    """Name the constraint kind behind an IntegrityError.

    Returns:
        ``"unique"``, ``"foreign_key"`` or None when neither can be recognised.
    """
    sqlstate = getattr(exc.orig, "sqlstate", None) or getattr(exc.orig, "pgcode", None)
    if sqlstate == _UNIQUE_SQLSTATE:
        return "unique"
    if sqlstate == _FOREIGN_KEY_SQLSTATE:
        return "foreign_key"

    message = str(exc.orig).lower()
    if "unique constraint" in message or "duplicate key" in message:
        return "unique"
    if "foreign key constraint" in message:
        return "foreign_key"
    return None


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Convert AppException into a problem response."""
    logger.warning(
        "Application exception occurred",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "exception_type": exc.type,
            "status_code": exc.status_code,
            "detail": exc.detail,
        },
    )
    return _problem_response(
        request,
        exc.status_code,
        exc.detail,
        exc.type,
        title=exc.title,
        instance=exc.instance,
        extra=exc.extra,
    )


async def not_found_exception_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Repository lookups that found nothing become 404."""
    logger.info(
        "Entity not found",
        extra={"request_id": _get_request_id(request), "path": request.url.path},
    )
    return _problem_response(
        request,
        status.HTTP_404_NOT_FOUND,
        exc.message,
        "not-found",
        extra=exc.details or None,
    )


async def invalid_filter_exception_handler(
    request: Request, exc: InvalidFilterError
) -> JSONResponse:
    """Unknown filter or sort columns become 400."""
    logger.warning(
        "Invalid filter",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "filter_name": exc.filter_name,
        },
    )
    return _problem_response(
        request,
        status.HTTP_400_BAD_REQUEST,
        exc.message,
        "invalid-filter",
        extra={"filter": exc.filter_name} if exc.filter_name else None,
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Map constraint violations to client errors.

    Unique violations become 409 and foreign-key violations 400; anything
    else is a server fault.
    """
    kind = classify_integrity_error(exc)
    logger.warning(
        "Integrity constraint violated",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "constraint_kind": kind,
        },
    )
    if kind == "unique":
        return _problem_response(
            request,
            status.HTTP_409_CONFLICT,
            "A record with the same unique value already exists",
            "unique-violation",
        )
    if kind == "foreign_key":
        return _problem_response(
            request,
            status.HTTP_400_BAD_REQUEST,
            "A referenced record does not exist",
            "foreign-key-violation",
        )
    return await generic_exception_handler(request, exc)


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Handle FastAPI request validation errors with field-level details."""
    request_id = _get_request_id(request)

    validation_errors = [
        ValidationError(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            type=error["type"],
            value=error.get("input"),
        )
        for error in exc.errors()
    ]

    logger.warning(
        "Request validation failed",
        extra={
            "request_id": request_id,
            "path": request.url.path,
            "method": request.method,
            "error_count": len(validation_errors),
            "fields": [e.field for e in validation_errors],
        },
    )

    problem = ValidationProblemDetail(
        type="validation-error",
        title="Validation Error",
        status=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=f"Request validation failed for {len(validation_errors)} field(s)",
        instance=str(request.url),
        errors=validation_errors,
    )

    response_data = problem.model_dump(mode="json", exclude_none=True)
    if request_id:
        response_data["request_id"] = request_id

    return JSONResponse(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, content=response_data)


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all: log the traceback and return a generic 500."""
    logger.error(
        "Unexpected exception occurred",
        extra={
            "request_id": _get_request_id(request),
            "path": request.url.path,
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
        exc_info=exc,
    )
    return _problem_response(
        request,
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "An unexpected error occurred while processing your request",
        "internal-error",
        title="Internal Server Error",
    )


def configure_exception_handlers(app: FastAPI) -> None:
    """Register all problem-detail handlers on ``app``."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(NotFoundError, not_found_exception_handler)
    app.add_exception_handler(InvalidFilterError, invalid_filter_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers configured")
