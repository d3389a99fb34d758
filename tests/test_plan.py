"""Unit tests for CascadePlan and the write-operation value types."""

from __future__ import annotations

import pytest

from fitfusion.domain.cascade import CascadePlan, PlanKind
from fitfusion.foundation.domain.ports import DELETE_FIELD, WriteKind, WriteOperation


def _delete(collection: str, document_id: str) -> WriteOperation:
    return WriteOperation(collection=collection, document_id=document_id, kind=WriteKind.DELETE)


@pytest.mark.unit
class TestWriteOperation:
    def test_path(self) -> None:
        assert _delete("routines", "R1").path == "routines/R1"

    def test_update_requires_fields(self) -> None:
        with pytest.raises(ValueError, match="requires fields"):
            WriteOperation(collection="routines", document_id="R1", kind=WriteKind.UPDATE)

    def test_delete_takes_no_fields(self) -> None:
        with pytest.raises(ValueError, match="takes no fields"):
            WriteOperation(
                collection="routines",
                document_id="R1",
                kind=WriteKind.DELETE,
                fields={"isPublic": False},
            )

    def test_delete_field_is_singleton(self) -> None:
        assert type(DELETE_FIELD)() is DELETE_FIELD
        assert repr(DELETE_FIELD) == "DELETE_FIELD"


@pytest.mark.unit
class TestCascadePlan:
    def test_empty_plan_has_no_batches(self) -> None:
        plan = CascadePlan(kind=PlanKind.EXPIRY_SWEEP)
        assert plan.is_empty
        assert len(plan) == 0
        assert plan.batches() == []

    def test_owner_deletion_requires_owner_id(self) -> None:
        with pytest.raises(ValueError, match="owner_id"):
            CascadePlan(kind=PlanKind.OWNER_DELETION)

    def test_rejects_duplicate_documents(self) -> None:
        with pytest.raises(ValueError, match="more than once"):
            CascadePlan(
                kind=PlanKind.OWNER_DELETION,
                owner_id="U1",
                operations=(_delete("routines", "R1"), _delete("routines", "R1")),
            )

    def test_rejects_non_positive_batch_size(self) -> None:
        with pytest.raises(ValueError, match="max_batch_size"):
            CascadePlan(kind=PlanKind.EXPIRY_SWEEP, max_batch_size=0)

    def test_batches_split_in_order(self) -> None:
        ops = tuple(_delete("routines", f"R{i}") for i in range(7))
        plan = CascadePlan(
            kind=PlanKind.OWNER_DELETION, owner_id="U1", operations=ops, max_batch_size=3
        )
        batches = plan.batches()
        assert [len(b) for b in batches] == [3, 3, 1]
        assert [op for batch in batches for op in batch] == list(ops)

    def test_single_batch_when_within_limit(self) -> None:
        ops = tuple(_delete("routines", f"R{i}") for i in range(500))
        plan = CascadePlan(kind=PlanKind.OWNER_DELETION, owner_id="U1", operations=ops)
        assert len(plan.batches()) == 1

    def test_paths_and_iteration(self) -> None:
        plan = CascadePlan(
            kind=PlanKind.OWNER_DELETION,
            owner_id="U1",
            operations=(_delete("clients", "U1"), _delete("routines", "R1")),
        )
        assert plan.paths == ["clients/U1", "routines/R1"]
        assert [op.document_id for op in plan] == ["U1", "R1"]
