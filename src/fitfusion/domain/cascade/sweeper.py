"""Scheduled revocation of expired public-sharing tokens.

The store cannot expire fields on its own. This sweep scans for shared
routines past their expiry and flips them back to private through the
executor's batch-write path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fitfusion.foundation.domain.exceptions import PlannerError

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from fitfusion.domain.cascade.executor import CascadeExecutor
    from fitfusion.domain.cascade.planner import CascadePlanner
    from fitfusion.foundation.domain.ports import StoreGatewayPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SweepReport:
    """Result of one sweep.

    Attributes:
        updated_count: Routines switched back to private.
        swept_at: Server time the expiry decision was made against.
        batches_committed: Atomic batches written.
    """

    updated_count: int
    swept_at: datetime
    batches_committed: int = 0


class ExpirySweeper:
    """Runs the expiry scan and applies the resulting plan.

    Idempotent: a second run with no new expirations finds nothing, since
    every routine it updated now has ``isPublic == false``.
    """

    def __init__(
        self,
        store: StoreGatewayPort,
        planner: CascadePlanner,
        executor: CascadeExecutor,
    ) -> None:
        self._store = store
        self._planner = planner
        self._executor = executor

    def run_sweep(self, clock: Callable[[], datetime] | None = None) -> SweepReport:
        """Revoke every public share that expired before the server's now.

        Args:
            clock: Source of the current time. Defaults to the store's server
                clock so that all instances agree on what has expired.

        Returns:
            SweepReport. An empty sweep is a success with ``updated_count == 0``.

        Raises:
            PlannerError: If the clock read or the scan fails. Nothing is
                written in that case.
            ExecutorError: If the batch commit fails.
        """
        try:
            now = (clock or self._store.server_now)()
        except Exception as exc:
            raise PlannerError(
                "Failed to read the server clock", {"cause": type(exc).__name__}
            ) from exc

        logger.info("expiry_sweep_started", extra={"now": now.isoformat()})

        plan = self._planner.build_expiry_sweep_plan(now)
        if plan.is_empty:
            logger.info("expiry_sweep_completed", extra={"updated_count": 0})
            return SweepReport(updated_count=0, swept_at=now)

        result = self._executor.execute(plan)
        logger.info(
            "expiry_sweep_completed",
            extra={
                "updated_count": result.operations_applied,
                "batches_committed": result.batches_committed,
            },
        )
        return SweepReport(
            updated_count=result.operations_applied,
            swept_at=now,
            batches_committed=result.batches_committed,
        )
