"""Cascade executor: applies a plan atomically, then cleans up credentials.

Two sequential steps with no transactional bridge between them:

1. Commit every batch of the plan against the store. A batch either fully
   commits or fully aborts.
2. For owner deletions only, delete the identity-provider credential. A
   failure here is logged as cleanup debt and recorded on the result; it
   never fails or rolls back the store-side cascade.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fitfusion.domain.cascade.plan import PlanKind
from fitfusion.foundation.domain.exceptions import ExecutorError, IdentityDeletionFailed

if TYPE_CHECKING:
    from fitfusion.domain.cascade.plan import CascadePlan
    from fitfusion.foundation.domain.ports import IdentityGatewayPort, StoreGatewayPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Outcome of applying a cascade plan.

    Attributes:
        store_committed: Every batch of the plan committed.
        identity_deleted: The credential was deleted (owner deletions only).
        operations_applied: Writes that mutated a document. Updates of
            documents already removed by a concurrent cascade are not counted.
        batches_committed: Number of atomic batches committed.
        identity_error: Set when credential deletion failed after commit.
    """

    store_committed: bool
    identity_deleted: bool = False
    operations_applied: int = 0
    batches_committed: int = 0
    identity_error: IdentityDeletionFailed | None = None

    @property
    def has_cleanup_debt(self) -> bool:
        """Store side is done but a credential may still exist."""
        return self.identity_error is not None


class CascadeExecutor:
    """Applies cascade plans through the store and identity gateways."""

    def __init__(self, store: StoreGatewayPort, identity: IdentityGatewayPort) -> None:
        self._store = store
        self._identity = identity

    def execute(self, plan: CascadePlan) -> ExecutionResult:
        """Apply ``plan`` and, for owner deletions, delete the credential.

        Args:
            plan: Plan produced by CascadePlanner.

        Returns:
            ExecutionResult carrying both the store and identity outcomes.

        Raises:
            ExecutorError: If a batch commit fails. That batch mutated
                nothing; earlier batches of the same plan remain committed
                (``batches_committed`` in the error context).
        """
        applied = 0
        committed = 0

        for index, batch in enumerate(plan.batches()):
            try:
                applied += self._store.commit_batch(batch)
            except Exception as exc:
                logger.exception(
                    "cascade_batch_failed",
                    extra={
                        "plan_kind": plan.kind,
                        "owner_id": plan.owner_id,
                        "batch_index": index,
                        "batch_size": len(batch),
                    },
                )
                raise ExecutorError(
                    "Atomic batch commit failed",
                    {
                        "plan_kind": str(plan.kind),
                        "owner_id": plan.owner_id,
                        "batch_index": index,
                        "batches_committed": committed,
                        "cause": type(exc).__name__,
                    },
                ) from exc
            committed += 1
            logger.info(
                "cascade_batch_committed",
                extra={
                    "plan_kind": plan.kind,
                    "owner_id": plan.owner_id,
                    "batch_index": index,
                    "batch_size": len(batch),
                },
            )

        if plan.kind is not PlanKind.OWNER_DELETION or plan.owner_id is None:
            return ExecutionResult(
                store_committed=True,
                operations_applied=applied,
                batches_committed=committed,
            )

        identity_error = self._delete_credential(plan.owner_id)
        return ExecutionResult(
            store_committed=True,
            identity_deleted=identity_error is None,
            operations_applied=applied,
            batches_committed=committed,
            identity_error=identity_error,
        )

    def _delete_credential(self, owner_id: str) -> IdentityDeletionFailed | None:
        try:
            self._identity.delete_credential(owner_id)
        except Exception as exc:
            # Store is the source of truth; a lingering credential is cleanup debt.
            logger.exception("identity_deletion_failed", extra={"owner_id": owner_id})
            return IdentityDeletionFailed(owner_id, exc)
        logger.info("identity_deleted", extra={"owner_id": owner_id})
        return None
