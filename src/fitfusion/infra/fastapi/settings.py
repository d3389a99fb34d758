"""``APP_*`` and ``CORS_*`` settings for :func:`create_app`."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

# Env values are plain comma-separated strings, not JSON arrays.
CommaList = Annotated[list[str], NoDecode]


class CORSSettings(BaseSettings):
    """CORS policy; ``CORS_ALLOW_ORIGINS=https://a.app,https://b.app``.

    The browser-facing endpoints only need GET and POST.
    """

    model_config = SettingsConfigDict(env_prefix="CORS_", extra="ignore")

    allow_origins: CommaList = Field(default=["*"])
    allow_methods: CommaList = Field(default=["GET", "POST"])
    allow_headers: CommaList = Field(default=["*"])
    allow_credentials: bool = False

    @field_validator("allow_origins", "allow_methods", "allow_headers", mode="before")
    @classmethod
    def _split(cls, v: object) -> object:
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v

    @model_validator(mode="after")
    def _no_credentials_with_wildcard(self) -> CORSSettings:
        if self.allow_credentials and "*" in self.allow_origins:
            msg = "allow_credentials=True requires explicit allow_origins, not '*'"
            raise ValueError(msg)
        return self


def _installed_version() -> str:
    try:
        return version("fitfusion-cascade")
    except PackageNotFoundError:
        return "0.0.0"


class AppSettings(BaseSettings):
    """App metadata, docs URLs and discovery filters (``APP_`` prefix)."""

    model_config = SettingsConfigDict(env_prefix="APP_", extra="ignore")

    title: str = "FitFusion Cascade"
    version: str = Field(default_factory=_installed_version)
    description: str = "Cascade-consistency engine for FitFusion"
    docs_url: str | None = "/docs"
    openapi_url: str | None = "/openapi.json"
    debug: bool = False
    cors: CORSSettings = Field(default_factory=CORSSettings)

    # Entry point groups / names create_app() should not load.
    exclude_groups: frozenset[str] = frozenset()
    exclude_entry_points: frozenset[str] = frozenset()
