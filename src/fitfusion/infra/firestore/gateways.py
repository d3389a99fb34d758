"""Firestore and Firebase Auth adapters for the gateway ports.

Store writes use two Firestore primitives:

* Delete-only batches go through a ``WriteBatch`` (deleting a missing
  document is already a no-op in Firestore).
* Batches containing updates run in a transaction that reads every update
  target first and skips the ones that no longer exist, so a routine
  removed by a concurrent cascade does not abort the whole sweep.

Both are all-or-nothing and limited to 500 writes.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from firebase_admin import auth
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from fitfusion.foundation.domain.ports import DELETE_FIELD, Document, WriteKind

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping, Sequence
    from datetime import datetime

    from firebase_admin import App

    from fitfusion.foundation.domain.ports import QueryOperator, WriteOperation

logger = logging.getLogger(__name__)


def _to_firestore_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {
        name: firestore.DELETE_FIELD if value is DELETE_FIELD else value
        for name, value in fields.items()
    }


class FirestoreStoreGateway:
    """StoreGatewayPort backed by a ``google.cloud.firestore.Client``."""

    def __init__(
        self,
        client: firestore.Client,
        *,
        clock_document: str = "_system/clock",
    ) -> None:
        self._client = client
        self._clock_document = clock_document

    def get_document(self, collection: str, document_id: str) -> Document | None:
        snapshot = self._client.collection(collection).document(document_id).get()
        if not snapshot.exists:
            return None
        return Document(collection=collection, id=snapshot.id, data=snapshot.to_dict() or {})

    def query_where(
        self,
        collection: str,
        field: str,
        op: QueryOperator,
        value: Any,
    ) -> Iterator[Document]:
        query = self._client.collection(collection).where(filter=FieldFilter(field, op, value))
        for snapshot in query.stream():
            yield Document(collection=collection, id=snapshot.id, data=snapshot.to_dict() or {})

    def commit_batch(self, operations: Sequence[WriteOperation]) -> int:
        if not operations:
            return 0
        if all(op.kind is WriteKind.DELETE for op in operations):
            batch = self._client.batch()
            for op in operations:
                batch.delete(self._ref(op))
            batch.commit()
            return len(operations)
        return self._commit_in_transaction(operations)

    def server_now(self) -> datetime:
        """Server time via a ``SERVER_TIMESTAMP`` write to the clock document.

        This is a write; callers that only report (analytics) use a local clock.
        """
        ref = self._client.document(self._clock_document)
        ref.set({"now": firestore.SERVER_TIMESTAMP})
        snapshot = ref.get()
        return snapshot.get("now")

    def _ref(self, op: WriteOperation) -> firestore.DocumentReference:
        return self._client.collection(op.collection).document(op.document_id)

    def _commit_in_transaction(self, operations: Sequence[WriteOperation]) -> int:
        @firestore.transactional
        def apply(transaction: firestore.Transaction) -> int:
            # Firestore requires all transactional reads before any write.
            existing = {
                op.path: self._ref(op).get(transaction=transaction).exists
                for op in operations
                if op.kind is WriteKind.UPDATE
            }
            applied = 0
            for op in operations:
                if op.kind is WriteKind.DELETE:
                    transaction.delete(self._ref(op))
                    applied += 1
                elif existing[op.path]:
                    transaction.update(self._ref(op), _to_firestore_fields(op.fields or {}))
                    applied += 1
                else:
                    logger.debug("firestore_update_skipped_missing", extra={"path": op.path})
            return applied

        return apply(self._client.transaction())


class FirebaseIdentityGateway:
    """IdentityGatewayPort backed by Firebase Auth."""

    def __init__(self, app: App | None = None) -> None:
        self._app = app

    def delete_credential(self, owner_id: str) -> None:
        auth.delete_user(owner_id, app=self._app)
