"""FitFusion Infra TaskIQ -- broker, scheduler and the scheduled expiry sweep."""

from fitfusion.infra.taskiq.broker import (
    broker,
    get_broker,
    get_result_backend,
    get_scheduler,
    scheduler,
)
from fitfusion.infra.taskiq.settings import TaskIQSettings, get_taskiq_settings

__all__ = [
    "TaskIQSettings",
    "broker",
    "get_broker",
    "get_result_backend",
    "get_scheduler",
    "get_taskiq_settings",
    "scheduler",
]
