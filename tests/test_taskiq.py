"""Unit tests for the taskiq broker, settings and the scheduled sweep task."""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import MagicMock, patch

import pytest
from taskiq import TaskiqScheduler
from taskiq_redis import RedisAsyncResultBackend, RedisStreamBroker

from fitfusion.domain.cascade import SweepReport
from fitfusion.foundation.domain.exceptions import ExecutorError
from fitfusion.infra.taskiq.broker import (
    _LazyBroker,
    _LazyScheduler,
    get_broker,
    get_result_backend,
    get_scheduler,
)
from fitfusion.infra.taskiq.settings import TaskIQSettings, get_taskiq_settings
from fitfusion.infra.taskiq.tasks import cleanup_expired_tokens


@pytest.mark.unit
class TestTaskIQSettings:
    def test_defaults(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            settings = TaskIQSettings(_env_file=None)  # type: ignore[call-arg]
            assert settings.redis_url == "redis://localhost:6379/1"
            assert settings.result_ttl == 86400

    def test_env_var_override(self) -> None:
        env = {"TASKIQ_REDIS_URL": "redis://cache:6380/2", "TASKIQ_RESULT_TTL": "7200"}
        with patch.dict("os.environ", env, clear=True):
            settings = TaskIQSettings(_env_file=None)  # type: ignore[call-arg]
            assert settings.redis_url == "redis://cache:6380/2"
            assert settings.result_ttl == 7200

    def test_get_settings_is_cached(self) -> None:
        get_taskiq_settings.cache_clear()
        assert get_taskiq_settings() is get_taskiq_settings()


class TestFactoryFunctions:
    @pytest.mark.unit
    def test_get_broker_returns_redis_stream_broker(self) -> None:
        get_broker.cache_clear()
        get_result_backend.cache_clear()
        with patch.dict("os.environ", {}, clear=True):
            assert isinstance(get_broker(), RedisStreamBroker)

    @pytest.mark.unit
    def test_get_result_backend_returns_redis(self) -> None:
        get_result_backend.cache_clear()
        with patch.dict("os.environ", {}, clear=True):
            assert isinstance(get_result_backend(), RedisAsyncResultBackend)

    @pytest.mark.unit
    def test_get_scheduler_returns_taskiq_scheduler(self) -> None:
        get_broker.cache_clear()
        get_result_backend.cache_clear()
        get_scheduler.cache_clear()
        with patch.dict("os.environ", {}, clear=True):
            assert isinstance(get_scheduler(), TaskiqScheduler)

    @pytest.mark.unit
    def test_proxies_are_lazy(self) -> None:
        assert _LazyBroker()._instance is None
        assert _LazyScheduler()._instance is None


class TestCleanupExpiredTokensTask:
    @pytest.mark.unit
    def test_scheduled_on_sweep_cron(self) -> None:
        assert cleanup_expired_tokens.task_name == "cleanup_expired_tokens"
        assert cleanup_expired_tokens.labels["schedule"] == [{"cron": "0 3 * * *"}]

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_runs_sweep_and_returns_report(self) -> None:
        swept_at = datetime(2026, 3, 1, 3, 0, tzinfo=UTC)
        service = MagicMock()
        service.cleanup_expired_tokens.return_value = SweepReport(
            updated_count=2, swept_at=swept_at, batches_committed=1
        )

        with patch("fitfusion.infra.taskiq.tasks.get_cascade_service", return_value=service):
            result = await cleanup_expired_tokens()

        assert result == {
            "updated_count": 2,
            "swept_at": "2026-03-01T03:00:00+00:00",
            "batches_committed": 1,
        }
        service.cleanup_expired_tokens.assert_called_once_with()

    @pytest.mark.unit
    @pytest.mark.asyncio
    async def test_sweep_failure_is_raised_for_retry(self) -> None:
        service = MagicMock()
        service.cleanup_expired_tokens.side_effect = ExecutorError("Atomic batch commit failed")

        with (
            patch("fitfusion.infra.taskiq.tasks.get_cascade_service", return_value=service),
            pytest.raises(ExecutorError),
        ):
            await cleanup_expired_tokens()
