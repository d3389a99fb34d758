"""Port interface for the document store.

The store offers point reads, single-field filtered scans, atomic batch
writes of bounded size, and a server clock. It enforces no relationship
between documents; keeping dependents consistent is the cascade engine's job.

Example:
    >>> from fitfusion.foundation.domain.ports import StoreGatewayPort
    >>> def routine_ids(store: StoreGatewayPort, owner_id: str) -> list[str]:
    ...     return [d.id for d in store.query_where("routines", "clientId", "==", owner_id)]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, Literal, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence
    from datetime import datetime

QueryOperator = Literal["==", "!=", "<", "<=", ">", ">="]


class _DeleteField:
    """Sentinel marking a field for removal in an update operation."""

    _instance: _DeleteField | None = None

    def __new__(cls) -> _DeleteField:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "DELETE_FIELD"


DELETE_FIELD: Any = _DeleteField()


class WriteKind(StrEnum):
    """Mutation applied to a single document inside a batch."""

    DELETE = "delete"
    UPDATE = "update"


@dataclass(frozen=True, slots=True)
class Document:
    """Snapshot of a stored document.

    Attributes:
        collection: Collection the document lives in.
        id: Document identifier, unique within the collection.
        data: Field values at read time.
    """

    collection: str
    id: str
    data: Mapping[str, Any] = field(default_factory=dict)

    def get(self, name: str, default: Any = None) -> Any:
        return self.data.get(name, default)


@dataclass(frozen=True, slots=True)
class WriteOperation:
    """One (collection, document_id, kind, fields) tuple of a batch write.

    Attributes:
        collection: Target collection.
        document_id: Target document identifier.
        kind: DELETE or UPDATE.
        fields: Field values for UPDATE. ``DELETE_FIELD`` removes a field.
    """

    collection: str
    document_id: str
    kind: WriteKind
    fields: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        if self.kind is WriteKind.UPDATE and not self.fields:
            msg = f"Update of {self.collection}/{self.document_id} requires fields"
            raise ValueError(msg)
        if self.kind is WriteKind.DELETE and self.fields:
            msg = f"Delete of {self.collection}/{self.document_id} takes no fields"
            raise ValueError(msg)

    @property
    def path(self) -> str:
        return f"{self.collection}/{self.document_id}"


@runtime_checkable
class StoreGatewayPort(Protocol):
    """Port for the document store.

    Implementations raise any exception on I/O failure; the cascade engine
    wraps those into PlannerError / ExecutorError.
    """

    def get_document(self, collection: str, document_id: str) -> Document | None:
        """Read a single document.

        Returns:
            The document, or None if it does not exist.
        """
        ...

    def query_where(
        self,
        collection: str,
        field: str,
        op: QueryOperator,
        value: Any,
    ) -> Iterator[Document]:
        """Scan a collection with a single-field filter.

        The iterator is lazy, finite and one-shot.
        """
        ...

    def commit_batch(self, operations: Sequence[WriteOperation]) -> int:
        """Apply all operations atomically.

        Deletes of missing documents are no-ops. Updates of missing documents
        are skipped without failing the batch (the record was already handled
        by a concurrent cascade).

        Returns:
            Number of operations applied: every delete, present or not,
            plus the updates whose target existed.
        """
        ...

    def server_now(self) -> datetime:
        """Current time according to the store's server clock (timezone-aware)."""
        ...
