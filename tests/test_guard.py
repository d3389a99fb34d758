"""Unit tests for PermissionGuard gate ordering."""

from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

from fitfusion.domain.cascade import Authorized, Denied, PermissionGuard
from fitfusion.foundation.domain.exceptions import (
    AuthenticationError,
    PermissionDeniedError,
    PlannerError,
    ValidationError,
)
from fitfusion.foundation.domain.owner_value_objects import DenialReason

if TYPE_CHECKING:
    from fitfusion.infra.memory import InMemoryStoreGateway


@pytest.mark.unit
class TestAuthorizeClientDeletion:
    def test_trainer_may_delete_own_client(self, seeded_store: InMemoryStoreGateway) -> None:
        decision = PermissionGuard(seeded_store).authorize_client_deletion("T1", "U1")
        assert decision == Authorized(caller_id="T1", target_client_id="U1")
        assert decision.allowed is True

    @pytest.mark.parametrize("caller_id", [None, ""])
    def test_unauthenticated_is_checked_before_any_read(self, caller_id: str | None) -> None:
        store = MagicMock()

        decision = PermissionGuard(store).authorize_client_deletion(caller_id, "does-not-exist")

        assert decision == Denied(DenialReason.UNAUTHENTICATED)
        assert decision.allowed is False
        store.get_document.assert_not_called()

    def test_unauthenticated_wins_over_missing_argument(self) -> None:
        decision = PermissionGuard(MagicMock()).authorize_client_deletion(None, None)
        assert decision == Denied(DenialReason.UNAUTHENTICATED)

    def test_missing_client_id_is_invalid_argument(
        self, seeded_store: InMemoryStoreGateway
    ) -> None:
        with pytest.raises(ValidationError) as exc_info:
            PermissionGuard(seeded_store).authorize_client_deletion("T1", "")
        assert exc_info.value.field == "clientId"

    @pytest.mark.parametrize("caller_id", ["U2", "nobody"])
    def test_non_trainer_is_denied(
        self, seeded_store: InMemoryStoreGateway, caller_id: str
    ) -> None:
        decision = PermissionGuard(seeded_store).authorize_client_deletion(caller_id, "U1")
        assert decision == Denied(DenialReason.NOT_A_TRAINER)

    def test_other_trainers_client_is_denied(self, seeded_store: InMemoryStoreGateway) -> None:
        decision = PermissionGuard(seeded_store).authorize_client_deletion("T2", "U1")
        assert decision == Denied(DenialReason.NOT_YOUR_CLIENT)

    def test_missing_profile_is_not_your_client(self, seeded_store: InMemoryStoreGateway) -> None:
        decision = PermissionGuard(seeded_store).authorize_client_deletion("T1", "ghost")
        assert decision == Denied(DenialReason.NOT_YOUR_CLIENT)

    def test_read_failure_raises_planner_error(self) -> None:
        store = MagicMock()
        store.get_document.side_effect = TimeoutError("deadline exceeded")

        with pytest.raises(PlannerError):
            PermissionGuard(store).authorize_client_deletion("T1", "U1")


@pytest.mark.unit
class TestConfirmOwnerDeleted:
    def test_deleted_owner_passes(self, seeded_store: InMemoryStoreGateway) -> None:
        seeded_store.remove("users", "U1")
        PermissionGuard(seeded_store).confirm_owner_deleted("U1")

    def test_live_owner_record_is_rejected(self, seeded_store: InMemoryStoreGateway) -> None:
        with pytest.raises(ValidationError) as exc_info:
            PermissionGuard(seeded_store).confirm_owner_deleted("U1")

        assert exc_info.value.field == "ownerId"
        assert exc_info.value.context["owner_id"] == "U1"

    def test_read_failure_raises_planner_error(self) -> None:
        store = MagicMock()
        store.get_document.side_effect = TimeoutError("deadline exceeded")

        with pytest.raises(PlannerError):
            PermissionGuard(store).confirm_owner_deleted("U1")


@pytest.mark.unit
class TestDeniedToError:
    def test_unauthenticated_maps_to_authentication_error(self) -> None:
        err = Denied(DenialReason.UNAUTHENTICATED).to_error()
        assert isinstance(err, AuthenticationError)
        assert err.context == {}

    def test_reasons_map_to_permission_denied(self) -> None:
        err = Denied(DenialReason.NOT_YOUR_CLIENT).to_error(caller_id="T2")
        assert isinstance(err, PermissionDeniedError)
        assert err.reason == "not-your-client"
        assert err.context["caller_id"] == "T2"
