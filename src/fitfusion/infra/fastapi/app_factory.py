"""Assemble the cascade HTTP app from installed entry points.

Three groups are read: ``fitfusion.routers`` (APIRouter objects),
``fitfusion.error_handlers`` (``register(app)`` callables or
ErrorHandlerContribution values) and ``fitfusion.lifespan`` (hooks).
Tests pass ``exclude_groups`` with all three and wire what they need via
the ``extra_*`` arguments.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI
from starlette.middleware.cors import CORSMiddleware

from fitfusion.foundation.application import (
    ContributionGroup,
    ErrorHandlerContribution,
    LifespanContribution,
    discover,
)
from fitfusion.infra.fastapi.lifespan import compose_lifespan
from fitfusion.infra.fastapi.settings import AppSettings

if TYPE_CHECKING:
    from fastapi import APIRouter

logger = logging.getLogger(__name__)


def create_app(
    settings: AppSettings | None = None,
    *,
    extra_routers: list[APIRouter] | None = None,
    extra_lifespan_hooks: list[LifespanContribution] | None = None,
    extra_error_handlers: list[ErrorHandlerContribution] | None = None,
    exclude_groups: frozenset[str] | None = None,
    exclude_names: frozenset[str] | None = None,
) -> FastAPI:
    """Build the FastAPI app.

    Args:
        settings: Application settings; loaded from ``APP_*`` when omitted.
        extra_routers: Routers included before the discovered ones.
        extra_lifespan_hooks: Hooks merged with the discovered ones by priority.
        extra_error_handlers: Handlers registered before the discovered ones.
        exclude_groups: Entry point groups to skip. Defaults to
            ``settings.exclude_groups``.
        exclude_names: Entry point names to skip in every group. Defaults to
            ``settings.exclude_entry_points``.
    """
    settings = settings or AppSettings()
    skip_groups = settings.exclude_groups if exclude_groups is None else exclude_groups
    skip_names = settings.exclude_entry_points if exclude_names is None else exclude_names

    def discovered(group: str) -> list[object]:
        if group in skip_groups:
            return []
        return [c.value for c in discover(group, exclude_names=skip_names)]

    hooks = list(extra_lifespan_hooks or [])
    for value in discovered(ContributionGroup.LIFESPAN):
        if not isinstance(value, LifespanContribution):
            value = LifespanContribution(hook=value)  # type: ignore[arg-type]
        hooks.append(value)

    app = FastAPI(
        title=settings.title,
        version=settings.version,
        description=settings.description,
        docs_url=settings.docs_url,
        openapi_url=settings.openapi_url,
        debug=settings.debug,
        lifespan=compose_lifespan(hooks),
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.allow_origins,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    handlers = [*(extra_error_handlers or []), *discovered(ContributionGroup.ERROR_HANDLERS)]
    _install_error_handlers(app, handlers)

    for router in [*(extra_routers or []), *discovered(ContributionGroup.ROUTERS)]:
        app.include_router(router)  # type: ignore[arg-type]
        logger.info("router_included", extra={"prefix": getattr(router, "prefix", "")})

    return app


def _install_error_handlers(app: FastAPI, contributions: list[object]) -> None:
    for value in contributions:
        if isinstance(value, ErrorHandlerContribution):
            app.add_exception_handler(value.exception_class, value.handler)
            logger.info(
                "error_handler_registered",
                extra={"exception": value.exception_class.__name__},
            )
        elif callable(value):
            value(app)
        else:
            logger.warning("error_handler_ignored", extra={"value": repr(value)})
