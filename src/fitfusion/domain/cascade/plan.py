"""Cascade plan: the in-memory list of writes computed before any write occurs."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from fitfusion.domain.cascade.settings import MAX_BATCH_SIZE

if TYPE_CHECKING:
    from collections.abc import Iterator

    from fitfusion.foundation.domain.ports import WriteOperation


class PlanKind(StrEnum):
    """What triggered the plan.

    Only OWNER_DELETION plans are followed by credential deletion.
    """

    OWNER_DELETION = "owner_deletion"
    EXPIRY_SWEEP = "expiry_sweep"


@dataclass(frozen=True, slots=True)
class CascadePlan:
    """Ordered set of write operations plus the batch split to apply them with.

    Attributes:
        kind: Trigger context.
        operations: Writes in application order, one per document.
        owner_id: The removed owner (OWNER_DELETION only).
        max_batch_size: Upper bound of operations per atomic batch.

    Example:
        >>> plan = CascadePlan(kind=PlanKind.EXPIRY_SWEEP)
        >>> plan.is_empty
        True
    """

    kind: PlanKind
    operations: tuple[WriteOperation, ...] = ()
    owner_id: str | None = None
    max_batch_size: int = MAX_BATCH_SIZE

    def __post_init__(self) -> None:
        if self.max_batch_size < 1:
            msg = f"max_batch_size must be positive, got {self.max_batch_size}"
            raise ValueError(msg)
        if self.kind is PlanKind.OWNER_DELETION and not self.owner_id:
            msg = "Owner deletion plan requires owner_id"
            raise ValueError(msg)
        paths = [op.path for op in self.operations]
        if len(paths) != len(set(paths)):
            msg = "Cascade plan names the same document more than once"
            raise ValueError(msg)

    def __len__(self) -> int:
        return len(self.operations)

    def __iter__(self) -> Iterator[WriteOperation]:
        return iter(self.operations)

    @property
    def is_empty(self) -> bool:
        return not self.operations

    @property
    def paths(self) -> list[str]:
        """Document paths named by the plan, in order."""
        return [op.path for op in self.operations]

    def batches(self) -> list[tuple[WriteOperation, ...]]:
        """Split operations into sequential chunks of at most max_batch_size.

        Each chunk is committed as its own atomic batch. An empty plan has
        no batches.
        """
        size = self.max_batch_size
        return [self.operations[i : i + size] for i in range(0, len(self.operations), size)]
