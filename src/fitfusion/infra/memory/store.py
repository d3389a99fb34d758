"""In-memory store and identity gateways.

Same contract as the Firestore adapters: point reads return snapshots,
scans are one-shot iterators over a snapshot, batch commits are
all-or-nothing, and updates of missing documents are skipped. Used by the
test suite and by local development (``FIREBASE_BACKEND=memory``).
"""

from __future__ import annotations

import copy
import operator
import threading
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from fitfusion.foundation.domain.ports import DELETE_FIELD, Document, WriteKind

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Sequence

    from fitfusion.foundation.domain.ports import QueryOperator, WriteOperation

_OPERATORS: dict[str, Callable[[Any, Any], bool]] = {
    "==": operator.eq,
    "!=": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


class InMemoryStoreGateway:
    """Dict-backed document store.

    Attributes:
        commit_count: Batches committed successfully.
        fail_commits: When set, every commit raises this exception before
            touching any document.
    """

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = threading.Lock()
        self._clock = clock or (lambda: datetime.now(UTC))
        self.commit_count = 0
        self.fail_commits: Exception | None = None

    def put(self, collection: str, document_id: str, data: dict[str, Any]) -> None:
        """Create or replace a document (seeding helper)."""
        with self._lock:
            self._collections.setdefault(collection, {})[document_id] = copy.deepcopy(data)

    def remove(self, collection: str, document_id: str) -> None:
        """Drop a document outside any batch (simulates an external deletion)."""
        with self._lock:
            self._collections.get(collection, {}).pop(document_id, None)

    def get_document(self, collection: str, document_id: str) -> Document | None:
        with self._lock:
            data = self._collections.get(collection, {}).get(document_id)
            if data is None:
                return None
            return Document(collection=collection, id=document_id, data=copy.deepcopy(data))

    def query_where(
        self,
        collection: str,
        field: str,
        op: QueryOperator,
        value: Any,
    ) -> Iterator[Document]:
        compare = _OPERATORS[op]
        with self._lock:
            snapshot = copy.deepcopy(self._collections.get(collection, {}))
        return _scan(collection, snapshot, field, compare, value)

    def commit_batch(self, operations: Sequence[WriteOperation]) -> int:
        with self._lock:
            if self.fail_commits is not None:
                raise self.fail_commits
            staged = copy.deepcopy(self._collections)
            applied = 0
            for op in operations:
                docs = staged.setdefault(op.collection, {})
                if op.kind is WriteKind.DELETE:
                    # Counted even when absent; Firestore cannot tell either.
                    docs.pop(op.document_id, None)
                    applied += 1
                    continue
                current = docs.get(op.document_id)
                if current is None:
                    # Already removed by a concurrent cascade.
                    continue
                for name, field_value in (op.fields or {}).items():
                    if field_value is DELETE_FIELD:
                        current.pop(name, None)
                    else:
                        current[name] = copy.deepcopy(field_value)
                applied += 1
            self._collections = staged
            self.commit_count += 1
            return applied

    def server_now(self) -> datetime:
        return self._clock()


def _scan(
    collection: str,
    snapshot: dict[str, dict[str, Any]],
    field: str,
    compare: Callable[[Any, Any], bool],
    value: Any,
) -> Iterator[Document]:
    for document_id, data in snapshot.items():
        if field not in data:
            continue
        try:
            matched = compare(data[field], value)
        except TypeError:
            matched = False
        if matched:
            yield Document(collection=collection, id=document_id, data=data)


class InMemoryIdentityGateway:
    """Set-backed credential registry.

    Attributes:
        failure: When set, every deletion raises this exception.
        deleted: Owner ids whose credentials were deleted, in order.
    """

    def __init__(self, owner_ids: set[str] | None = None) -> None:
        self._credentials = set(owner_ids or ())
        self.failure: Exception | None = None
        self.deleted: list[str] = []

    def add(self, owner_id: str) -> None:
        self._credentials.add(owner_id)

    def exists(self, owner_id: str) -> bool:
        return owner_id in self._credentials

    def delete_credential(self, owner_id: str) -> None:
        if self.failure is not None:
            raise self.failure
        if owner_id not in self._credentials:
            msg = f"No credential for owner {owner_id}"
            raise LookupError(msg)
        self._credentials.remove(owner_id)
        self.deleted.append(owner_id)
