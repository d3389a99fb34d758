"""Domain exception hierarchy for type-safe error handling.

Every error raised by the cascade engine derives from :class:`DomainError`
and carries a machine-readable ``error_code`` plus structured context, so the
HTTP layer can translate it into a precise problem-details response and the
logs can record it without string parsing.

Two families exist:

* Caller errors (authentication, permission, argument) are surfaced with a
  specific reason code.
* Cascade errors (planner, executor) abort the invocation before or during
  the atomic write and are surfaced as a generic internal failure. They are
  safe to retry.

Example:
    >>> from fitfusion.foundation.domain.exceptions import PermissionDeniedError
    >>> raise PermissionDeniedError("not-your-client", caller_id="T2")
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "AuthenticationError",
    "AuthorizationError",
    "CascadeError",
    "DomainError",
    "ExecutorError",
    "IdentityDeletionFailed",
    "PermissionDeniedError",
    "PlannerError",
    "ValidationError",
]


class DomainError(Exception):
    """Base class for all domain errors.

    Attributes:
        error_code: Machine-readable error code for client handling.
        message: Human-readable error description.
        context: Structured debugging information (document ids, field names).

    Example:
        >>> raise DomainError("Operation failed", context={"owner_id": "U1"})
        DomainError: Operation failed (owner_id=U1)
    """

    error_code: str = "DOMAIN_ERROR"

    def __init__(self, message: str, context: dict[str, Any] | None = None) -> None:
        """Initialize domain error with message and optional context.

        Args:
            message: Human-readable error description.
            context: Structured debugging information. Keys should be snake_case.
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """String representation including context for logging."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation for debugging."""
        return f"{self.__class__.__name__}({self.message!r}, context={self.context!r})"


class ValidationError(DomainError):
    """Raised when a request argument is missing or malformed.

    Maps to HTTP 422. ``field`` names the offending argument using the
    caller-facing name (e.g. ``clientId``).

    Example:
        >>> raise ValidationError("clientId", "clientId is required")
        ValidationError: Invalid argument 'clientId': clientId is required
    """

    error_code: str = "INVALID_ARGUMENT"

    def __init__(self, field: str, reason: str, **extra_context: Any) -> None:
        self.field = field
        self.reason = reason
        message = f"Invalid argument '{field}': {reason}"
        context = {"field": field, "reason": reason, **extra_context}
        super().__init__(message, context)


class AuthenticationError(DomainError):
    """Raised when the caller is not authenticated.

    Maps to HTTP 401. Always checked before any document is read, so an
    unauthenticated caller learns nothing about the target's existence.
    """

    error_code: str = "UNAUTHENTICATED"

    def __init__(
        self,
        message: str = "User must be authenticated",
        context: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, context)


class AuthorizationError(DomainError):
    """Raised when an authenticated caller lacks the required permissions.

    Maps to HTTP 403.
    """

    error_code: str = "PERMISSION_DENIED"


class PermissionDeniedError(AuthorizationError):
    """Authorization failure with a specific, client-actionable reason code.

    Attributes:
        reason: One of the guard denial reasons (``not-a-trainer``,
            ``not-your-client``).

    Example:
        >>> raise PermissionDeniedError("not-a-trainer", caller_id="U9")
        PermissionDeniedError: Permission denied: not-a-trainer (reason=not-a-trainer, caller_id=U9)
    """

    def __init__(self, reason: str, **extra_context: Any) -> None:
        self.reason = reason
        message = f"Permission denied: {reason}"
        super().__init__(message, {"reason": reason, **extra_context})


class CascadeError(DomainError):
    """Base class for failures inside the cascade engine itself.

    Nothing was mutated when this is raised from a single-batch plan, so the
    whole invocation may be retried.
    """

    error_code: str = "INTERNAL"

    #: Whether retrying the same invocation is safe.
    retryable: bool = True


class PlannerError(CascadeError):
    """Raised when a read or scan fails while building a plan."""

    error_code: str = "PLANNER_ERROR"


class ExecutorError(CascadeError):
    """Raised when an atomic batch commit fails."""

    error_code: str = "EXECUTOR_ERROR"


class IdentityDeletionFailed(DomainError):
    """Credential deletion failed after the store batch committed.

    Never propagated as the failure of the overall operation. The executor
    records it on the execution result and logs it as cleanup debt.
    """

    error_code: str = "IDENTITY_DELETION_FAILED"

    def __init__(self, owner_id: str, cause: BaseException) -> None:
        self.owner_id = owner_id
        self.cause = cause
        super().__init__(
            f"Credential deletion failed for owner {owner_id}",
            {"owner_id": owner_id, "cause": type(cause).__name__},
        )
