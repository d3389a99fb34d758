"""Cascade engine configuration using Pydantic settings.

Settings are loaded from environment variables with the ``CASCADE_`` prefix.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Firestore rejects batches with more than 500 writes.
MAX_BATCH_SIZE = 500


class CascadeSettings(BaseSettings):
    """Configuration for the planner, executor and expiry sweep.

    Environment Variables:
        CASCADE_MAX_BATCH_SIZE: Operations per atomic batch (default: 500)
        CASCADE_SWEEP_CRON: Cron expression for the expiry sweep
            (default: ``0 3 * * *``, once every 24 hours)
        CASCADE_RECENT_ACTIVITY_DAYS: Window for "recent" routines in
            trainer analytics (default: 30)

    Example:
        >>> settings = CascadeSettings()
        >>> settings.max_batch_size
        500
    """

    model_config = SettingsConfigDict(
        env_prefix="CASCADE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    max_batch_size: int = Field(
        default=MAX_BATCH_SIZE,
        ge=1,
        le=MAX_BATCH_SIZE,
        description="Maximum operations committed in one atomic batch",
    )
    sweep_cron: str = Field(
        default="0 3 * * *",
        description="Cron schedule for the expired public token sweep",
    )
    recent_activity_days: int = Field(
        default=30,
        ge=1,
        le=365,
        description="Days counted as recent activity in trainer analytics",
    )


@lru_cache(maxsize=1)
def get_cascade_settings() -> CascadeSettings:
    """Get cached cascade settings singleton.

    Returns:
        CascadeSettings instance loaded from environment.
    """
    return CascadeSettings()
