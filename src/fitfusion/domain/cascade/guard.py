"""Permission guard for caller-invoked client deletion.

Gates, evaluated in order; the first failure short-circuits:

1. Caller is authenticated            -> else ``unauthenticated``
2. Target argument is present         -> else ValidationError(clientId)
3. Caller's owner record is a trainer -> else ``not-a-trainer``
4. Target's profile names the caller  -> else ``not-your-client``

Authentication is checked before any document is read, so an
unauthenticated caller is denied even when the target does not exist.

The owner-deleted trigger skips these gates, so it is only honored once the
owner record is really gone (:meth:`PermissionGuard.confirm_owner_deleted`).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar

from fitfusion.foundation.domain.exceptions import (
    AuthenticationError,
    DomainError,
    PermissionDeniedError,
    PlannerError,
    ValidationError,
)
from fitfusion.foundation.domain.owner_value_objects import DenialReason, Role
from fitfusion.foundation.domain.schema import (
    COLLECTION_CLIENTS,
    COLLECTION_USERS,
    FIELD_ROLE,
    FIELD_TRAINER_ID,
)

if TYPE_CHECKING:
    from fitfusion.foundation.domain.ports import StoreGatewayPort

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Authorized:
    """All gates passed; the caller may delete the target client."""

    caller_id: str
    target_client_id: str

    allowed: ClassVar[bool] = True


@dataclass(frozen=True, slots=True)
class Denied:
    """A gate failed. No partial authorization exists."""

    reason: DenialReason

    allowed: ClassVar[bool] = False

    def to_error(self, **context: Any) -> DomainError:
        """Exception the request path raises for this denial."""
        if self.reason is DenialReason.UNAUTHENTICATED:
            return AuthenticationError(context=context or None)
        return PermissionDeniedError(self.reason, **context)


AuthorizationDecision = Authorized | Denied


class PermissionGuard:
    """Role- and ownership-based checks ahead of a client deletion."""

    def __init__(self, store: StoreGatewayPort) -> None:
        self._store = store

    def authorize_client_deletion(
        self,
        caller_id: str | None,
        target_client_id: str | None,
    ) -> AuthorizationDecision:
        """Decide whether ``caller_id`` may delete ``target_client_id``.

        Args:
            caller_id: Verified caller id, or None when unauthenticated.
            target_client_id: Client to delete.

        Returns:
            Authorized, or Denied with the first failing reason.

        Raises:
            ValidationError: If the caller is authenticated but no target
                was given.
            PlannerError: If reading the caller or target record fails.
        """
        if not caller_id:
            return Denied(DenialReason.UNAUTHENTICATED)

        if not target_client_id:
            raise ValidationError("clientId", "clientId is required")

        try:
            caller = self._store.get_document(COLLECTION_USERS, caller_id)
            if caller is None or caller.get(FIELD_ROLE) != Role.TRAINER:
                return self._deny(DenialReason.NOT_A_TRAINER, caller_id, target_client_id)

            profile = self._store.get_document(COLLECTION_CLIENTS, target_client_id)
        except Exception as exc:
            raise PlannerError(
                "Failed to read records for authorization",
                {"caller_id": caller_id, "client_id": target_client_id},
            ) from exc

        if profile is None or profile.get(FIELD_TRAINER_ID) != caller_id:
            return self._deny(DenialReason.NOT_YOUR_CLIENT, caller_id, target_client_id)

        return Authorized(caller_id=caller_id, target_client_id=target_client_id)

    def confirm_owner_deleted(self, owner_id: str) -> None:
        """Check that ``users/{owner_id}`` no longer exists.

        Raises:
            ValidationError: If the owner record is still present.
            PlannerError: If the read fails.
        """
        try:
            owner = self._store.get_document(COLLECTION_USERS, owner_id)
        except Exception as exc:
            raise PlannerError("Failed to read owner record", {"owner_id": owner_id}) from exc

        if owner is not None:
            logger.warning("owner_deleted_rejected_owner_present", extra={"owner_id": owner_id})
            raise ValidationError("ownerId", "owner record still exists", owner_id=owner_id)

    def _deny(self, reason: DenialReason, caller_id: str, target_client_id: str) -> Denied:
        logger.warning(
            "client_deletion_denied",
            extra={"reason": reason, "caller_id": caller_id, "client_id": target_client_id},
        )
        return Denied(reason)
