"""Scheduled cascade tasks.

``cleanup_expired_tokens`` runs the expiry sweep once per
``CASCADE_SWEEP_CRON`` (every 24 hours by default). The sweep itself is
synchronous I/O against the store, so it runs in a worker thread.
"""

from __future__ import annotations

import asyncio
from typing import Any

from taskiq import TaskiqEvents, TaskiqState

from fitfusion.domain.cascade import get_cascade_settings
from fitfusion.infra.firestore import get_cascade_service
from fitfusion.infra.observability import configure_logging, get_logger
from fitfusion.infra.taskiq.broker import broker

logger = get_logger(__name__)


@broker.on_event(TaskiqEvents.WORKER_STARTUP)
async def _configure_worker_logging(state: TaskiqState) -> None:
    configure_logging()


@broker.task(
    task_name="cleanup_expired_tokens",
    schedule=[{"cron": get_cascade_settings().sweep_cron}],
)
async def cleanup_expired_tokens() -> dict[str, Any]:
    """Revoke expired public routine shares.

    Returns:
        Sweep report as a JSON-serializable dict (stored in the result backend).
    """
    service = get_cascade_service()
    try:
        report = await asyncio.to_thread(service.cleanup_expired_tokens)
    except Exception:
        logger.exception("expiry_sweep_task_failed")
        raise

    logger.info(
        "expiry_sweep_task_completed",
        updated_count=report.updated_count,
        swept_at=report.swept_at.isoformat(),
    )
    return {
        "updated_count": report.updated_count,
        "swept_at": report.swept_at.isoformat(),
        "batches_committed": report.batches_committed,
    }
