"""RFC 7807 Problem Details responses for the cascade API.

Caller errors keep their machine-readable code (``UNAUTHENTICATED``,
``PERMISSION_DENIED`` with ``context.reason``, ``INVALID_ARGUMENT``).
Cascade failures are reported as a generic, retryable internal error; the
read or batch that failed goes to the log under the correlation ID, never
to the caller.

Usage:
    from fitfusion.infra.fastapi.error_handlers import register_exception_handlers

    app = FastAPI()
    register_exception_handlers(app)
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from fitfusion.foundation.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CascadeError,
    DomainError,
    ValidationError,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastapi import FastAPI, Request

logger = logging.getLogger(__name__)

PROBLEM_MEDIA_TYPE = "application/problem+json"
REQUEST_ID_HEADER = "X-Request-ID"

RETRYABLE_DETAIL = "The operation could not be completed. It is safe to retry."


class ProblemDetail(BaseModel):
    """Problem Details body.

    ``type``, ``title``, ``status``, ``detail`` and ``instance`` are the
    RFC 7807 members; ``error_code``, ``context`` and ``correlation_id`` are
    extensions. ``correlation_id`` is only set on 5xx responses.
    """

    type: str = Field(..., examples=["/errors/permission-denied"])
    title: str
    status: int = Field(..., ge=400, le=599)
    detail: str
    instance: str | None = None
    error_code: str | None = Field(default=None, examples=["PERMISSION_DENIED"])
    context: dict[str, Any] | None = None
    correlation_id: str | None = None


@dataclass(frozen=True)
class _CallerProblem:
    type: str
    title: str
    status: int
    expose_context: bool = True


# Starlette resolves handlers along the exception MRO, so subclasses win.
_CALLER_PROBLEMS: dict[type[DomainError], _CallerProblem] = {
    AuthenticationError: _CallerProblem(
        "/errors/unauthenticated", "Unauthorized", 401, expose_context=False
    ),
    AuthorizationError: _CallerProblem("/errors/permission-denied", "Forbidden", 403),
    ValidationError: _CallerProblem("/errors/invalid-argument", "Invalid Argument", 422),
    DomainError: _CallerProblem("/errors/domain-error", "Bad Request", 400),
}

_SECRET_ASSIGNMENT = re.compile(
    r"(?P<name>token|secret|api[_-]?key|password)\s*=\s*['\"]?[^'\"\s]+['\"]?",
    re.IGNORECASE,
)

_SENSITIVE_KEYS = frozenset(
    {"password", "secret", "token", "public_token", "api_key", "apikey", "credential"}
)


def _problem_response(problem: ProblemDetail) -> JSONResponse:
    return JSONResponse(
        status_code=problem.status,
        content=problem.model_dump(exclude_none=True),
        media_type=PROBLEM_MEDIA_TYPE,
    )


def _get_correlation_id(request: Request) -> str:
    """Correlation ID from the ``X-Request-ID`` header, or a fresh one."""
    return request.headers.get(REQUEST_ID_HEADER) or uuid4().hex


def _sanitize_context(context: dict[str, Any] | None) -> dict[str, Any] | None:
    """Make exception context safe to return.

    Sensitive keys (sharing tokens, secrets) are dropped, ``name=value``
    secrets inside strings are redacted, datetimes become ISO strings and
    anything else that is not JSON-serializable is stringified.

    Returns:
        The sanitized mapping, or None if nothing remains.
    """
    if not context:
        return None
    sanitized = {
        key: _sanitize_value(value)
        for key, value in context.items()
        if key.lower() not in _SENSITIVE_KEYS
    }
    return sanitized or None


def _sanitize_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, str):
        return _SECRET_ASSIGNMENT.sub(lambda m: f"{m['name'].lower()}=[REDACTED]", value)
    if isinstance(value, dict):
        return _sanitize_context(value)
    if isinstance(value, (list, tuple)):
        return [_sanitize_value(v) for v in value]
    try:
        json.dumps(value)
    except (TypeError, ValueError):
        return str(value)
    return value


def _caller_error_handler(
    kind: _CallerProblem,
) -> Callable[[Request, DomainError], Awaitable[JSONResponse]]:
    async def handler(request: Request, exc: DomainError) -> JSONResponse:
        problem = ProblemDetail(
            type=kind.type,
            title=kind.title,
            status=kind.status,
            detail=exc.message,
            instance=str(request.url.path),
            error_code=exc.error_code,
            context=_sanitize_context(exc.context) if kind.expose_context else None,
        )
        response = _problem_response(problem)
        if kind.status == 401:
            response.headers["WWW-Authenticate"] = 'Bearer realm="API"'
        return response

    return handler


async def cascade_error_handler(request: Request, exc: CascadeError) -> JSONResponse:
    """PlannerError / ExecutorError -> generic 500 ``INTERNAL``."""
    correlation_id = _get_correlation_id(request)
    logger.error(
        "cascade_error",
        extra={
            "correlation_id": correlation_id,
            "path": str(request.url.path),
            "error_code": exc.error_code,
            "context": exc.context,
        },
    )
    problem = ProblemDetail(
        type="/errors/internal",
        title="Internal Server Error",
        status=500,
        detail=RETRYABLE_DETAIL,
        instance=str(request.url.path),
        error_code=CascadeError.error_code,
        correlation_id=correlation_id,
    )
    return _problem_response(problem)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Malformed request body or header -> 422 ``REQUEST_VALIDATION_ERROR``."""
    errors = [
        {"loc": list(err.get("loc", [])), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
    problem = ProblemDetail(
        type="/errors/request-validation-error",
        title="Request Validation Error",
        status=422,
        detail="Request validation failed",
        instance=str(request.url.path),
        error_code="REQUEST_VALIDATION_ERROR",
        context={"errors": errors},
    )
    return _problem_response(problem)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything else -> 500 ``INTERNAL_ERROR``; details only in debug mode."""
    correlation_id = _get_correlation_id(request)
    logger.exception(
        "unhandled_exception",
        extra={
            "correlation_id": correlation_id,
            "path": str(request.url.path),
            "method": request.method,
            "exception_type": type(exc).__name__,
        },
    )

    if getattr(request.app, "debug", False):
        detail = f"{type(exc).__name__}: {exc}"
        context: dict[str, Any] | None = {"exception_type": type(exc).__name__}
    else:
        detail = "An internal error occurred. Please contact support with the correlation ID."
        context = None

    problem = ProblemDetail(
        type="/errors/internal-error",
        title="Internal Server Error",
        status=500,
        detail=detail,
        instance=str(request.url.path),
        error_code="INTERNAL_ERROR",
        context=context,
        correlation_id=correlation_id,
    )
    return _problem_response(problem)


def register_exception_handlers(app: FastAPI) -> None:
    """Install the Problem Details handlers on ``app``.

    Registered for: AuthenticationError (401), AuthorizationError (403),
    ValidationError (422), CascadeError (500, generic), any other
    DomainError (400), RequestValidationError (422) and Exception (500).
    """
    for exc_class, kind in _CALLER_PROBLEMS.items():
        app.add_exception_handler(exc_class, _caller_error_handler(kind))  # type: ignore[arg-type]
    app.add_exception_handler(CascadeError, cascade_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(
        RequestValidationError,
        request_validation_handler,  # type: ignore[arg-type]
    )
    app.add_exception_handler(Exception, unhandled_exception_handler)
