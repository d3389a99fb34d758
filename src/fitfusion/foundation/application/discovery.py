"""Entry point groups of the cascade service and the loader that reads them.

``pyproject.toml`` declares the service's routers, its Problem Details
registration and the observability lifespan under the groups in
:class:`ContributionGroup`; :func:`create_app` loads them through
:func:`discover`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import StrEnum
from importlib.metadata import entry_points
from typing import Any

logger = logging.getLogger(__name__)


class ContributionGroup(StrEnum):
    ROUTERS = "fitfusion.routers"
    ERROR_HANDLERS = "fitfusion.error_handlers"
    LIFESPAN = "fitfusion.lifespan"


@dataclass(frozen=True, slots=True)
class DiscoveredContribution:
    """A loaded entry point: its ``name``, ``group`` and loaded ``value``."""

    name: str
    group: str
    value: Any


def discover(
    group: str,
    *,
    exclude_names: frozenset[str] = frozenset(),
) -> list[DiscoveredContribution]:
    """Load the entry points of ``group`` in name order.

    Name order keeps router inclusion and handler registration the same on
    every install. A name declared twice is loaded once (the first seen). An
    entry point whose import fails is logged and skipped; the rest still load.
    """
    loaded: dict[str, DiscoveredContribution] = {}

    for ep in sorted(entry_points(group=group), key=lambda e: e.name):
        log_extra = {"group": group, "entry_point": ep.name}
        if ep.name in exclude_names:
            logger.debug("entry_point_excluded", extra=log_extra)
        elif ep.name in loaded:
            logger.warning("entry_point_duplicate_ignored", extra=log_extra)
        else:
            try:
                value = ep.load()
            except Exception:
                logger.exception("entry_point_load_failed", extra=log_extra)
            else:
                loaded[ep.name] = DiscoveredContribution(name=ep.name, group=group, value=value)

    logger.info("entry_points_discovered", extra={"group": group, "entry_points": list(loaded)})
    return list(loaded.values())
