"""FitFusion Infra Firestore -- firebase-admin adapters and service providers."""

from fitfusion.infra.firestore.gateways import FirebaseIdentityGateway, FirestoreStoreGateway
from fitfusion.infra.firestore.provider import (
    get_analytics_service,
    get_cascade_service,
    get_firebase_app,
    get_identity_gateway,
    get_store_gateway,
)
from fitfusion.infra.firestore.settings import FirebaseSettings, get_firebase_settings

__all__ = [
    "FirebaseIdentityGateway",
    "FirebaseSettings",
    "FirestoreStoreGateway",
    "get_analytics_service",
    "get_cascade_service",
    "get_firebase_app",
    "get_firebase_settings",
    "get_identity_gateway",
    "get_store_gateway",
]
