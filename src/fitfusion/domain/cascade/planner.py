"""Cascade planner: discovers every document that must change for a cascade.

Pure read and in-memory assembly. No method here writes to the store, and
no method returns a partial plan: any read or scan failure aborts with
PlannerError before the executor is ever reached.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fitfusion.domain.cascade.plan import CascadePlan, PlanKind
from fitfusion.domain.cascade.settings import get_cascade_settings
from fitfusion.foundation.domain.exceptions import PlannerError
from fitfusion.foundation.domain.ports import DELETE_FIELD, WriteKind, WriteOperation
from fitfusion.foundation.domain.schema import (
    COLLECTION_CLIENTS,
    COLLECTION_ROUTINES,
    COLLECTION_USERS,
    FIELD_CLIENT_ID,
    FIELD_IS_PUBLIC,
    FIELD_PUBLIC_EXPIRES_AT,
    FIELD_PUBLIC_TOKEN,
    FIELD_UPDATED_AT,
)

if TYPE_CHECKING:
    from fitfusion.foundation.domain.ports import StoreGatewayPort

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    """Treat naive timestamps as UTC so they compare with server time."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


class CascadePlanner:
    """Builds cascade plans from store reads.

    Attributes:
        _store: Store gateway used for reads and scans only.
        _max_batch_size: Batch split applied to every plan produced.
    """

    def __init__(
        self,
        store: StoreGatewayPort,
        *,
        max_batch_size: int | None = None,
    ) -> None:
        self._store = store
        self._max_batch_size = max_batch_size or get_cascade_settings().max_batch_size

    def build_deletion_plan(
        self,
        owner_id: str,
        *,
        include_owner_record: bool = False,
    ) -> CascadePlan:
        """Plan the removal of everything that depends on ``owner_id``.

        Order: profile record, owner record (request path only), then one
        delete per routine whose ``clientId`` equals the owner id.

        Args:
            owner_id: The owner being removed.
            include_owner_record: Also delete ``users/{owner_id}``. False when
                the trigger is that record's own deletion.

        Returns:
            Plan with N routine deletes plus the profile (if present) and the
            owner record (if requested).

        Raises:
            PlannerError: If any read or scan fails.
        """
        operations: list[WriteOperation] = []

        try:
            profile = self._store.get_document(COLLECTION_CLIENTS, owner_id)
            if profile is not None:
                operations.append(_delete(COLLECTION_CLIENTS, owner_id))

            if include_owner_record:
                # Deleting a missing document is a no-op, so no read is needed.
                operations.append(_delete(COLLECTION_USERS, owner_id))

            dependents = self._store.query_where(
                COLLECTION_ROUTINES, FIELD_CLIENT_ID, "==", owner_id
            )
            operations.extend(_delete(COLLECTION_ROUTINES, doc.id) for doc in dependents)
        except Exception as exc:
            logger.exception(
                "cascade_plan_failed",
                extra={"owner_id": owner_id, "plan_kind": PlanKind.OWNER_DELETION},
            )
            raise PlannerError(
                "Failed to read dependent records",
                {"owner_id": owner_id, "cause": type(exc).__name__},
            ) from exc

        plan = CascadePlan(
            kind=PlanKind.OWNER_DELETION,
            operations=tuple(operations),
            owner_id=owner_id,
            max_batch_size=self._max_batch_size,
        )
        logger.info(
            "cascade_plan_built",
            extra={
                "owner_id": owner_id,
                "plan_kind": plan.kind,
                "operations": len(plan),
                "batches": len(plan.batches()),
                "profile_found": profile is not None,
            },
        )
        return plan

    def build_expiry_sweep_plan(self, now: datetime) -> CascadePlan:
        """Plan the revocation of every public share that expired before ``now``.

        The scan filters on ``isPublic == true``; expiry is compared here
        because the store accepts one filter per scan. Routines without an
        expiry never match.

        Args:
            now: Server time of this sweep. Also written as ``updatedAt``.

        Returns:
            Plan of update operations. Empty when nothing expired.

        Raises:
            PlannerError: If the scan fails.
        """
        now = _as_utc(now)
        operations: list[WriteOperation] = []

        try:
            shared = self._store.query_where(COLLECTION_ROUTINES, FIELD_IS_PUBLIC, "==", True)
            for doc in shared:
                expires_at = doc.get(FIELD_PUBLIC_EXPIRES_AT)
                if not isinstance(expires_at, datetime) or _as_utc(expires_at) >= now:
                    continue
                operations.append(
                    WriteOperation(
                        collection=COLLECTION_ROUTINES,
                        document_id=doc.id,
                        kind=WriteKind.UPDATE,
                        fields={
                            FIELD_IS_PUBLIC: False,
                            FIELD_PUBLIC_TOKEN: DELETE_FIELD,
                            FIELD_PUBLIC_EXPIRES_AT: DELETE_FIELD,
                            FIELD_UPDATED_AT: now,
                        },
                    )
                )
        except Exception as exc:
            logger.exception("expiry_sweep_plan_failed", extra={"now": now.isoformat()})
            raise PlannerError(
                "Failed to scan shared routines",
                {"now": now.isoformat(), "cause": type(exc).__name__},
            ) from exc

        logger.info(
            "expiry_sweep_plan_built",
            extra={"now": now.isoformat(), "operations": len(operations)},
        )
        return CascadePlan(
            kind=PlanKind.EXPIRY_SWEEP,
            operations=tuple(operations),
            max_batch_size=self._max_batch_size,
        )


def _delete(collection: str, document_id: str) -> WriteOperation:
    return WriteOperation(collection=collection, document_id=document_id, kind=WriteKind.DELETE)
