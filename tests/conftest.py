"""Shared fixtures: in-memory gateways seeded with a small trainer/client graph.

Graph:
    T1, T2       trainers
    U1           client of T1, three routines (one shared, expired)
    U2           client of T2, one routine
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from fitfusion.domain.cascade import CascadeSettings, ClientCascadeService
from fitfusion.infra.memory import InMemoryIdentityGateway, InMemoryStoreGateway

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


@pytest.fixture()
def now() -> datetime:
    return NOW


@pytest.fixture()
def store() -> InMemoryStoreGateway:
    """Empty store whose server clock is frozen at NOW."""
    return InMemoryStoreGateway(clock=lambda: NOW)


@pytest.fixture()
def identity() -> InMemoryIdentityGateway:
    return InMemoryIdentityGateway({"T1", "T2", "U1", "U2"})


@pytest.fixture()
def seeded_store(store: InMemoryStoreGateway) -> InMemoryStoreGateway:
    store.put("users", "T1", {"role": "trainer"})
    store.put("users", "T2", {"role": "trainer"})
    store.put("users", "U1", {"role": "client"})
    store.put("users", "U2", {"role": "client"})
    store.put("clients", "U1", {"trainerId": "T1", "name": "Ana"})
    store.put("clients", "U2", {"trainerId": "T2", "name": "Ben"})
    store.put(
        "routines",
        "R1",
        {
            "clientId": "U1",
            "trainerId": "T1",
            "isPublic": True,
            "publicToken": "tok-r1",
            "publicExpiresAt": NOW - timedelta(minutes=10),
            "createdAt": NOW - timedelta(days=3),
        },
    )
    store.put(
        "routines",
        "R2",
        {
            "clientId": "U1",
            "trainerId": "T1",
            "isPublic": False,
            "createdAt": NOW - timedelta(days=60),
        },
    )
    store.put(
        "routines",
        "R3",
        {
            "clientId": "U1",
            "trainerId": "T1",
            "isPublic": False,
            "createdAt": NOW - timedelta(days=1),
        },
    )
    store.put(
        "routines",
        "R4",
        {"clientId": "U2", "trainerId": "T2", "isPublic": False, "createdAt": NOW},
    )
    return store


@pytest.fixture()
def service(
    seeded_store: InMemoryStoreGateway,
    identity: InMemoryIdentityGateway,
) -> ClientCascadeService:
    return ClientCascadeService.from_gateways(
        seeded_store, identity, CascadeSettings(max_batch_size=500)
    )
