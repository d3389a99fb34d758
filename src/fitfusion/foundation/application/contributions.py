"""Contribution types for the auto-discovery system.

Modules declare these through entry points so the web app and the worker
pick up lifespan hooks and error handlers without manual wiring. They are
framework-agnostic and live in the foundation layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

# Recommended lifespan priority constants
LIFESPAN_PRIORITY_OBSERVABILITY = 50


@dataclass(frozen=True, slots=True)
class ErrorHandlerContribution:
    """Describes an exception handler to be registered on the app.

    Attributes:
        exception_class: The exception type to handle.
        handler: The async handler callable ``(Request, Exception) -> Response``.
    """

    exception_class: type[BaseException]
    handler: Any  # Callable[[Request, Exception], Awaitable[Response]]


@dataclass(frozen=True, slots=True)
class LifespanContribution:
    """Describes a lifespan hook to be auto-discovered and registered.

    Attributes:
        hook: An async context manager factory ``(app) -> AsyncContextManager[None]``.
        priority: Ordering priority. Lower priorities start first (and shut down last).
    """

    hook: Any  # Callable[[Any], AsyncContextManager[None]]
    priority: int = 500
