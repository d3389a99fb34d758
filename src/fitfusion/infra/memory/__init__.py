"""FitFusion Infra Memory -- in-process gateways for tests and local development."""

from fitfusion.infra.memory.store import InMemoryIdentityGateway, InMemoryStoreGateway

__all__ = ["InMemoryIdentityGateway", "InMemoryStoreGateway"]
