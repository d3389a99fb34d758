"""Read-only trainer analytics.

A reporting operation over the same collections the cascade engine keeps
consistent. It takes no part in consistency: it reads eventually-consistent
snapshots and writes nothing. ``generatedAt`` and the recent-activity
cutoff come from the local clock; the store's server clock is a write
(see FirestoreStoreGateway.server_now) and is reserved for the sweep.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from fitfusion.domain.cascade.settings import get_cascade_settings
from fitfusion.foundation.domain.exceptions import AuthenticationError, PermissionDeniedError
from fitfusion.foundation.domain.owner_value_objects import DenialReason, Role
from fitfusion.foundation.domain.schema import (
    COLLECTION_CLIENTS,
    COLLECTION_ROUTINES,
    COLLECTION_USERS,
    FIELD_CREATED_AT,
    FIELD_IS_PUBLIC,
    FIELD_ROLE,
    FIELD_TRAINER_ID,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from fitfusion.foundation.domain.ports import StoreGatewayPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TrainerAnalytics:
    """Counts over a trainer's clients and routines."""

    client_count: int
    routine_count: int
    public_routine_count: int
    private_routine_count: int
    recent_routines: int
    generated_at: datetime


class TrainerAnalyticsService:
    """Builds TrainerAnalytics for the calling trainer."""

    def __init__(
        self,
        store: StoreGatewayPort,
        *,
        recent_days: int | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._clock = clock or (lambda: datetime.now(UTC))
        self._recent_days = recent_days or get_cascade_settings().recent_activity_days

    def generate(self, caller_id: str | None) -> TrainerAnalytics:
        """Report on the caller's clients and routines.

        Raises:
            AuthenticationError: Caller is not authenticated.
            PermissionDeniedError: Caller is not a trainer.
        """
        if not caller_id:
            raise AuthenticationError()

        caller = self._store.get_document(COLLECTION_USERS, caller_id)
        if caller is None or caller.get(FIELD_ROLE) != Role.TRAINER:
            raise PermissionDeniedError(DenialReason.NOT_A_TRAINER, caller_id=caller_id)

        clients = list(
            self._store.query_where(COLLECTION_CLIENTS, FIELD_TRAINER_ID, "==", caller_id)
        )
        routines = list(
            self._store.query_where(COLLECTION_ROUTINES, FIELD_TRAINER_ID, "==", caller_id)
        )

        now = self._clock()
        cutoff = now - timedelta(days=self._recent_days)
        public = sum(1 for r in routines if r.get(FIELD_IS_PUBLIC) is True)
        recent = 0
        for routine in routines:
            created_at = routine.get(FIELD_CREATED_AT)
            if not isinstance(created_at, datetime):
                continue
            if created_at.tzinfo is None:
                created_at = created_at.replace(tzinfo=UTC)
            if created_at > cutoff:
                recent += 1

        logger.debug(
            "trainer_analytics_generated",
            extra={"trainer_id": caller_id, "routines": len(routines)},
        )
        return TrainerAnalytics(
            client_count=len(clients),
            routine_count=len(routines),
            public_routine_count=public,
            private_routine_count=len(routines) - public,
            recent_routines=recent,
            generated_at=now,
        )
