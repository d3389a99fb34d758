"""Unit tests for the in-memory store and identity gateways."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from fitfusion.foundation.domain.ports import (
    DELETE_FIELD,
    IdentityGatewayPort,
    StoreGatewayPort,
    WriteKind,
    WriteOperation,
)
from fitfusion.infra.memory import InMemoryIdentityGateway, InMemoryStoreGateway

if TYPE_CHECKING:
    from datetime import datetime


@pytest.mark.unit
class TestInMemoryStoreGateway:
    def test_satisfies_port(self, store: InMemoryStoreGateway) -> None:
        assert isinstance(store, StoreGatewayPort)

    def test_reads_are_snapshots(self, store: InMemoryStoreGateway) -> None:
        store.put("users", "U1", {"role": "client"})
        doc = store.get_document("users", "U1")
        assert doc is not None
        doc.data["role"] = "trainer"  # type: ignore[index]

        again = store.get_document("users", "U1")
        assert again is not None
        assert again.get("role") == "client"

    def test_query_skips_documents_without_field(self, store: InMemoryStoreGateway) -> None:
        store.put("routines", "R1", {"clientId": "U1"})
        store.put("routines", "R2", {})
        store.put("routines", "R3", {"clientId": "U2"})

        ids = [d.id for d in store.query_where("routines", "clientId", "==", "U1")]

        assert ids == ["R1"]

    def test_query_incomparable_values_do_not_match(self, store: InMemoryStoreGateway) -> None:
        store.put("routines", "R1", {"publicExpiresAt": "tomorrow"})
        assert list(store.query_where("routines", "publicExpiresAt", "<", 5)) == []

    def test_commit_counts_deletes_and_existing_updates(self, store: InMemoryStoreGateway) -> None:
        store.put("routines", "R1", {"isPublic": True})
        ops = [
            WriteOperation(collection="routines", document_id="R1", kind=WriteKind.DELETE),
            WriteOperation(collection="routines", document_id="gone", kind=WriteKind.DELETE),
            WriteOperation(
                collection="routines",
                document_id="also-gone",
                kind=WriteKind.UPDATE,
                fields={"isPublic": False},
            ),
        ]

        assert store.commit_batch(ops) == 2
        assert store.get_document("routines", "also-gone") is None
        assert store.commit_count == 1

    def test_update_removes_delete_field(self, store: InMemoryStoreGateway) -> None:
        store.put("routines", "R1", {"isPublic": True, "publicToken": "abc"})
        store.commit_batch(
            [
                WriteOperation(
                    collection="routines",
                    document_id="R1",
                    kind=WriteKind.UPDATE,
                    fields={"isPublic": False, "publicToken": DELETE_FIELD},
                )
            ]
        )
        doc = store.get_document("routines", "R1")
        assert doc is not None
        assert dict(doc.data) == {"isPublic": False}

    def test_failed_commit_changes_nothing(self, store: InMemoryStoreGateway) -> None:
        store.put("routines", "R1", {})
        store.fail_commits = ConnectionError("aborted")

        with pytest.raises(ConnectionError):
            store.commit_batch(
                [WriteOperation(collection="routines", document_id="R1", kind=WriteKind.DELETE)]
            )

        assert store.get_document("routines", "R1") is not None
        assert store.commit_count == 0

    def test_server_now_uses_clock(self, store: InMemoryStoreGateway, now: datetime) -> None:
        assert store.server_now() == now


@pytest.mark.unit
class TestInMemoryIdentityGateway:
    def test_satisfies_port(self) -> None:
        assert isinstance(InMemoryIdentityGateway(), IdentityGatewayPort)

    def test_delete_credential(self) -> None:
        gateway = InMemoryIdentityGateway({"U1"})
        gateway.delete_credential("U1")
        assert not gateway.exists("U1")
        assert gateway.deleted == ["U1"]

    def test_unknown_owner_raises(self) -> None:
        with pytest.raises(LookupError):
            InMemoryIdentityGateway().delete_credential("U1")

    def test_injected_failure(self) -> None:
        gateway = InMemoryIdentityGateway({"U1"})
        gateway.failure = RuntimeError("auth unavailable")
        with pytest.raises(RuntimeError):
            gateway.delete_credential("U1")
        assert gateway.exists("U1")
