"""Liveness endpoint.

The cascade engine owns no persisted state, so liveness is not coupled to
the store; a store outage surfaces as cascade errors instead.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Request

router = APIRouter(tags=["health"])


@router.get("/healthz")
async def healthz(request: Request) -> dict[str, Any]:
    """Report that the service is up, with its version."""
    return {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "version": request.app.version,
    }
