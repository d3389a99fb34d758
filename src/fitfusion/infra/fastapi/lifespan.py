"""Priority-ordered lifespan composition used by create_app()."""

from __future__ import annotations

import logging
from contextlib import AsyncExitStack, asynccontextmanager
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from fastapi import FastAPI

    from fitfusion.foundation.application import LifespanContribution

logger = logging.getLogger(__name__)


def compose_lifespan(hooks: list[LifespanContribution]) -> object:
    """Chain hooks into one FastAPI lifespan.

    Hooks enter in ascending priority and exit in reverse, so logging is
    configured before anything that logs and torn down last.
    """
    ordered = sorted(hooks, key=lambda h: h.priority)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with AsyncExitStack() as stack:
            for contrib in ordered:
                logger.debug("lifespan_hook_entered", extra={"priority": contrib.priority})
                await stack.enter_async_context(contrib.hook(app))
            yield

    return lifespan
