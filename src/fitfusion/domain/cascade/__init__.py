"""FitFusion cascade domain -- referential integrity for the document store.

Planner/executor split: the planner reads and assembles a CascadePlan with
no side effects; the executor applies it as atomic batches and then
performs the best-effort credential deletion.
"""

from fitfusion.domain.cascade.analytics import TrainerAnalytics, TrainerAnalyticsService
from fitfusion.domain.cascade.executor import CascadeExecutor, ExecutionResult
from fitfusion.domain.cascade.guard import (
    AuthorizationDecision,
    Authorized,
    Denied,
    PermissionGuard,
)
from fitfusion.domain.cascade.plan import CascadePlan, PlanKind
from fitfusion.domain.cascade.planner import CascadePlanner
from fitfusion.domain.cascade.service import ClientCascadeService, DeleteClientResult
from fitfusion.domain.cascade.settings import CascadeSettings, get_cascade_settings
from fitfusion.domain.cascade.sweeper import ExpirySweeper, SweepReport

__all__ = [
    "AuthorizationDecision",
    "Authorized",
    "CascadeExecutor",
    "CascadePlan",
    "CascadePlanner",
    "CascadeSettings",
    "ClientCascadeService",
    "DeleteClientResult",
    "Denied",
    "ExecutionResult",
    "ExpirySweeper",
    "PermissionGuard",
    "PlanKind",
    "SweepReport",
    "TrainerAnalytics",
    "TrainerAnalyticsService",
    "get_cascade_settings",
]
