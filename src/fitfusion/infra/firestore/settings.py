"""Firebase configuration using Pydantic settings.

Settings are loaded from environment variables with the ``FIREBASE_`` prefix.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class FirebaseSettings(BaseSettings):
    """Configuration for the Firestore and Firebase Auth gateways.

    Environment Variables:
        FIREBASE_BACKEND: ``firestore`` or ``memory`` (default: firestore)
        FIREBASE_PROJECT_ID: Google Cloud project id (default: from credentials)
        FIREBASE_CREDENTIALS_PATH: Service account JSON path
            (default: Application Default Credentials)
        FIREBASE_CLOCK_DOCUMENT: Document written to read the server clock
            (default: ``_system/clock``)
    """

    model_config = SettingsConfigDict(
        env_prefix="FIREBASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    backend: Literal["firestore", "memory"] = Field(
        default="firestore",
        description="Gateway implementation to wire",
    )
    project_id: str | None = Field(default=None, description="Google Cloud project id")
    credentials_path: str | None = Field(
        default=None,
        description="Service account key file; ADC is used when unset",
    )
    clock_document: str = Field(
        default="_system/clock",
        pattern=r"^[^/]+/[^/]+$",
        description="collection/document path used for server time round-trips",
    )


@lru_cache(maxsize=1)
def get_firebase_settings() -> FirebaseSettings:
    """Get cached Firebase settings singleton.

    Returns:
        FirebaseSettings instance loaded from environment.
    """
    return FirebaseSettings()
