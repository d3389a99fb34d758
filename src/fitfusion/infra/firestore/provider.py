"""Gateway and service providers.

Cached factories that wire the gateway adapters selected by
FirebaseSettings into the cascade services. Clear the caches with
``cache_clear()`` in tests.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

import firebase_admin
from firebase_admin import credentials, firestore

from fitfusion.domain.cascade import ClientCascadeService, TrainerAnalyticsService
from fitfusion.infra.firestore.gateways import FirebaseIdentityGateway, FirestoreStoreGateway
from fitfusion.infra.firestore.settings import get_firebase_settings
from fitfusion.infra.memory import InMemoryIdentityGateway, InMemoryStoreGateway

if TYPE_CHECKING:
    from fitfusion.foundation.domain.ports import IdentityGatewayPort, StoreGatewayPort

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_firebase_app() -> firebase_admin.App:
    """Get or initialize the default Firebase app.

    Uses the service account at FIREBASE_CREDENTIALS_PATH when set, otherwise
    Application Default Credentials.
    """
    settings = get_firebase_settings()
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    credential = (
        credentials.Certificate(settings.credentials_path)
        if settings.credentials_path
        else credentials.ApplicationDefault()
    )
    options = {"projectId": settings.project_id} if settings.project_id else None
    app = firebase_admin.initialize_app(credential, options)
    logger.info("firebase_app_initialized", extra={"project_id": settings.project_id})
    return app


@lru_cache(maxsize=1)
def get_store_gateway() -> StoreGatewayPort:
    """Store gateway for the configured backend."""
    settings = get_firebase_settings()
    if settings.backend == "memory":
        return InMemoryStoreGateway()
    return FirestoreStoreGateway(
        firestore.client(get_firebase_app()),
        clock_document=settings.clock_document,
    )


@lru_cache(maxsize=1)
def get_identity_gateway() -> IdentityGatewayPort:
    """Identity gateway for the configured backend."""
    if get_firebase_settings().backend == "memory":
        return InMemoryIdentityGateway()
    return FirebaseIdentityGateway(get_firebase_app())


@lru_cache(maxsize=1)
def get_cascade_service() -> ClientCascadeService:
    """Cascade service wired to the configured gateways."""
    return ClientCascadeService.from_gateways(get_store_gateway(), get_identity_gateway())


@lru_cache(maxsize=1)
def get_analytics_service() -> TrainerAnalyticsService:
    """Trainer analytics wired to the configured store gateway."""
    return TrainerAnalyticsService(get_store_gateway())
