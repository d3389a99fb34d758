"""FastAPI dependency functions for caller identity and cascade services.

The caller is identified by the ``X-User-ID`` header, set by the upstream
authentication layer after verifying the caller's credential. An absent or
blank header means the caller is unauthenticated; the services decide what
that implies.

Usage:
    from fitfusion.infra.fastapi.dependencies import CallerId, CascadeService

    @router.post("/clients/delete")
    def delete_client(caller_id: CallerId, service: CascadeService, ...):
        ...

Tests swap the services via ``app.dependency_overrides[get_cascade_service]``.
"""

# NOTE: Do NOT use ``from __future__ import annotations`` here.
# FastAPI resolves ``Annotated[..., Header()]`` parameters at runtime.

from typing import Annotated

from fastapi import Depends, Header

from fitfusion.domain.cascade import ClientCascadeService, TrainerAnalyticsService
from fitfusion.infra.firestore import get_analytics_service, get_cascade_service

CALLER_ID_HEADER = "X-User-ID"


def get_caller_id(
    x_user_id: Annotated[str | None, Header(alias=CALLER_ID_HEADER)] = None,
) -> str | None:
    """Verified caller id, or None when the request is unauthenticated."""
    if x_user_id is None:
        return None
    return x_user_id.strip() or None


CallerId = Annotated[str | None, Depends(get_caller_id)]
CascadeService = Annotated[ClientCascadeService, Depends(get_cascade_service)]
AnalyticsService = Annotated[TrainerAnalyticsService, Depends(get_analytics_service)]
