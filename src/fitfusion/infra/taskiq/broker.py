"""TaskIQ broker and scheduler configuration with Redis Stream.

The scheduler fires the expiry sweep on its 24-hour cron; workers pick the
task up from a Redis stream with acknowledgements, so a sweep interrupted by
a worker crash is redelivered.

Usage:
    # Start worker (loads the task module so the sweep is registered)
    # taskiq worker fitfusion.infra.taskiq.broker:broker fitfusion.infra.taskiq.tasks

    # Start scheduler (single instance only)
    # taskiq scheduler fitfusion.infra.taskiq.broker:scheduler fitfusion.infra.taskiq.tasks
"""

from __future__ import annotations

from functools import lru_cache

from taskiq import TaskiqScheduler
from taskiq.schedule_sources import LabelScheduleSource
from taskiq_redis import RedisAsyncResultBackend, RedisStreamBroker

from fitfusion.infra.taskiq.settings import get_taskiq_settings


@lru_cache(maxsize=1)
def get_result_backend() -> RedisAsyncResultBackend[object]:
    """Get or create the TaskIQ result backend."""
    settings = get_taskiq_settings()
    return RedisAsyncResultBackend(
        redis_url=settings.redis_url,
        result_ex_time=settings.result_ttl,
    )


@lru_cache(maxsize=1)
def get_broker() -> RedisStreamBroker:
    """Get or create the TaskIQ broker.

    Returns:
        RedisStreamBroker configured from TaskIQSettings with result backend.
    """
    settings = get_taskiq_settings()
    return RedisStreamBroker(url=settings.redis_url).with_result_backend(get_result_backend())


@lru_cache(maxsize=1)
def get_scheduler() -> TaskiqScheduler:
    """Get or create the TaskIQ scheduler.

    Schedules come from ``@broker.task(schedule=[...])`` labels only.

    WARNING: Only run ONE scheduler instance per deployment, otherwise the
    sweep is enqueued once per scheduler.
    """
    _broker = get_broker()
    return TaskiqScheduler(broker=_broker, sources=[LabelScheduleSource(_broker)])


# The taskiq CLI expects ``module:broker`` and ``module:scheduler`` attributes.
# Proxies defer creation until first attribute access.


class _LazyBroker:
    """Lazy proxy that defers broker creation until first attribute access."""

    _instance: RedisStreamBroker | None = None

    def _get(self) -> RedisStreamBroker:
        if self._instance is None:
            self._instance = get_broker()
        return self._instance

    def __getattr__(self, name: str) -> object:
        return getattr(self._get(), name)


class _LazyScheduler:
    """Lazy proxy that defers scheduler creation until first attribute access."""

    _instance: TaskiqScheduler | None = None

    def _get(self) -> TaskiqScheduler:
        if self._instance is None:
            self._instance = get_scheduler()
        return self._instance

    def __getattr__(self, name: str) -> object:
        return getattr(self._get(), name)


broker: RedisStreamBroker = _LazyBroker()  # type: ignore[assignment]
scheduler: TaskiqScheduler = _LazyScheduler()  # type: ignore[assignment]
