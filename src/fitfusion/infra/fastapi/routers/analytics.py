"""Trainer analytics router."""

# NOTE: Do NOT use ``from __future__ import annotations`` here.
# FastAPI needs the dependency annotations at runtime.

from datetime import datetime

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from fitfusion.domain.cascade import TrainerAnalytics
from fitfusion.infra.fastapi.dependencies import AnalyticsService, CallerId

router = APIRouter(prefix="/trainers", tags=["analytics"])


class TrainerAnalyticsResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    client_count: int
    routine_count: int
    public_routine_count: int
    private_routine_count: int
    recent_routines: int
    generated_at: datetime


@router.get("/me/analytics", response_model_by_alias=True)
def get_my_analytics(caller_id: CallerId, service: AnalyticsService) -> TrainerAnalyticsResponse:
    """Client and routine counts for the calling trainer."""
    return _analytics_response(service.generate(caller_id))


def _analytics_response(analytics: TrainerAnalytics) -> TrainerAnalyticsResponse:
    return TrainerAnalyticsResponse(
        client_count=analytics.client_count,
        routine_count=analytics.routine_count,
        public_routine_count=analytics.public_routine_count,
        private_routine_count=analytics.private_routine_count,
        recent_routines=analytics.recent_routines,
        generated_at=analytics.generated_at,
    )
