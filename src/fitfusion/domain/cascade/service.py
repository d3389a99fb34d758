"""Client cascade service: the three trigger entry points of the engine.

* ``handle_owner_deleted`` reacts to a ``users/{id}`` deletion reported by
  the store. System-initiated; no permission checks, so it refuses to run
  while the owner record still exists, and the owner record is not planned.
* ``delete_client`` is the caller-invoked path. Gated by PermissionGuard and
  also deletes the owner record.
* ``cleanup_expired_tokens`` is the scheduler entry point for the sweep.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from fitfusion.domain.cascade.executor import CascadeExecutor
from fitfusion.domain.cascade.guard import Denied, PermissionGuard
from fitfusion.domain.cascade.planner import CascadePlanner
from fitfusion.domain.cascade.settings import get_cascade_settings
from fitfusion.domain.cascade.sweeper import ExpirySweeper
from fitfusion.foundation.domain.exceptions import CascadeError
from fitfusion.foundation.domain.owner_value_objects import Role
from fitfusion.foundation.domain.schema import FIELD_ROLE

if TYPE_CHECKING:
    from collections.abc import Mapping

    from fitfusion.domain.cascade.executor import ExecutionResult
    from fitfusion.domain.cascade.settings import CascadeSettings
    from fitfusion.domain.cascade.sweeper import SweepReport
    from fitfusion.foundation.domain.ports import IdentityGatewayPort, StoreGatewayPort

logger = logging.getLogger(__name__)

CLIENT_DELETED_MESSAGE = "Client successfully deleted"
CREDENTIAL_PENDING_MESSAGE = (
    "Client successfully deleted; sign-in credential removal is pending"
)


@dataclass(frozen=True, slots=True)
class DeleteClientResult:
    """Response of the request path.

    Attributes:
        success: The store-side cascade committed.
        message: Human-readable outcome.
        execution: Detailed store and identity outcome.
    """

    success: bool
    message: str
    execution: ExecutionResult | None = None


class ClientCascadeService:
    """Wires guard, planner, executor and sweeper behind the trigger entry points."""

    def __init__(
        self,
        planner: CascadePlanner,
        executor: CascadeExecutor,
        guard: PermissionGuard,
        sweeper: ExpirySweeper,
    ) -> None:
        self._planner = planner
        self._executor = executor
        self._guard = guard
        self._sweeper = sweeper

    @classmethod
    def from_gateways(
        cls,
        store: StoreGatewayPort,
        identity: IdentityGatewayPort,
        settings: CascadeSettings | None = None,
    ) -> ClientCascadeService:
        """Build the service and its components around injected gateways."""
        settings = settings or get_cascade_settings()
        planner = CascadePlanner(store, max_batch_size=settings.max_batch_size)
        executor = CascadeExecutor(store, identity)
        return cls(
            planner=planner,
            executor=executor,
            guard=PermissionGuard(store),
            sweeper=ExpirySweeper(store, planner, executor),
        )

    def handle_owner_deleted(
        self,
        owner_id: str,
        prior_data: Mapping[str, Any] | None,
    ) -> ExecutionResult | None:
        """Cascade the deletion of ``users/{owner_id}``.

        Args:
            owner_id: Id of the deleted owner record.
            prior_data: Field values of the owner record before deletion.

        Returns:
            ExecutionResult, or None when the owner was not a client.

        Raises:
            ValidationError: If ``users/{owner_id}`` still exists.
            PlannerError: If discovering dependents fails.
            ExecutorError: If the batch commit fails.
        """
        role = (prior_data or {}).get(FIELD_ROLE)
        if role != Role.CLIENT:
            logger.info("owner_deleted_ignored", extra={"owner_id": owner_id, "role": role})
            return None

        # The trigger skips the permission gates; only act on a real deletion.
        self._guard.confirm_owner_deleted(owner_id)

        logger.info("owner_cascade_started", extra={"owner_id": owner_id})
        try:
            # users/{owner_id} is the trigger and is already gone.
            plan = self._planner.build_deletion_plan(owner_id)
            result = self._executor.execute(plan)
        except CascadeError:
            logger.exception("owner_cascade_failed", extra={"owner_id": owner_id})
            raise

        logger.info(
            "owner_cascade_completed",
            extra={
                "owner_id": owner_id,
                "operations_applied": result.operations_applied,
                "identity_deleted": result.identity_deleted,
            },
        )
        return result

    def delete_client(self, caller_id: str | None, client_id: str | None) -> DeleteClientResult:
        """Delete a client on behalf of its trainer.

        Args:
            caller_id: Verified caller id, or None when unauthenticated.
            client_id: Client to delete.

        Returns:
            DeleteClientResult with ``success=True`` once the store committed.

        Raises:
            AuthenticationError: Caller is not authenticated.
            ValidationError: ``clientId`` is missing.
            PermissionDeniedError: ``not-a-trainer`` or ``not-your-client``.
            PlannerError: Reading records failed; nothing was mutated.
            ExecutorError: Batch commit failed.
        """
        decision = self._guard.authorize_client_deletion(caller_id, client_id)
        if isinstance(decision, Denied):
            context = {"caller_id": caller_id, "client_id": client_id} if caller_id else {}
            raise decision.to_error(**context)

        try:
            plan = self._planner.build_deletion_plan(
                decision.target_client_id, include_owner_record=True
            )
            result = self._executor.execute(plan)
        except CascadeError:
            logger.exception(
                "client_deletion_failed",
                extra={"caller_id": caller_id, "client_id": client_id},
            )
            raise

        logger.info(
            "client_deleted",
            extra={
                "caller_id": caller_id,
                "client_id": client_id,
                "operations_applied": result.operations_applied,
                "identity_deleted": result.identity_deleted,
            },
        )
        message = CLIENT_DELETED_MESSAGE if result.identity_deleted else CREDENTIAL_PENDING_MESSAGE
        return DeleteClientResult(success=True, message=message, execution=result)

    def cleanup_expired_tokens(self) -> SweepReport:
        """Scheduler entry point: run one expiry sweep against the server clock."""
        return self._sweeper.run_sweep()
