"""structlog setup shared by the web app and the sweep worker.

Domain modules log through the standard library
(``logging.getLogger(__name__)`` with ``extra=``); :func:`configure_logging`
routes those records through structlog so every line carries the same
timestamp, level and redaction. Production emits one JSON object per line,
other environments a colored console format.

Sharing tokens (``publicToken``) and credential paths never reach the
output; see :class:`SensitiveDataProcessor`.

Usage:
    from fitfusion.infra.observability.logging import configure_logging
    configure_logging()
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING, Any

import structlog
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

if TYPE_CHECKING:
    from collections.abc import MutableMapping

Processor = structlog.types.Processor

SENSITIVE_FIELDS: frozenset[str] = frozenset(
    {
        "authorization",
        "password",
        "token",
        "api_key",
        "secret",
        "credential",
        "credentials_path",
        "private_key",
    }
)
# Substrings that mark compound keys such as publicToken.
_SENSITIVE_FRAGMENTS = ("password", "token")

REDACTED_VALUE: str = "***REDACTED***"

_HANDLER_NAME = "fitfusion-structlog"
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class LoggingSettings(BaseSettings):
    """``LOG_LEVEL`` and ``ENVIRONMENT``, read without a prefix.

    Example:
        >>> LoggingSettings(log_level="debug", environment="production").use_json_logs
        True
    """

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    environment: str = Field(default="development", alias="ENVIRONMENT")

    @field_validator("log_level", mode="before")
    @classmethod
    def _check_level(cls, v: Any) -> str:
        level = str(v).upper()
        if level not in _LEVELS:
            msg = f"log_level must be one of {', '.join(_LEVELS)}, got {v!r}"
            raise ValueError(msg)
        return level

    @property
    def use_json_logs(self) -> bool:
        return self.environment == "production"

    @property
    def log_level_int(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]


class SensitiveDataProcessor:
    """Replace values of sensitive keys with REDACTED_VALUE.

    A key is sensitive when it is in SENSITIVE_FIELDS (case-insensitive) or
    contains one of the fragments "password" or "token".
    """

    def __call__(
        self,
        logger: Any,
        method_name: str,
        event_dict: MutableMapping[str, Any],
    ) -> MutableMapping[str, Any]:
        for key in list(event_dict.keys()):
            if self._is_sensitive(key):
                event_dict[key] = REDACTED_VALUE
        return event_dict

    def _is_sensitive(self, key: str) -> bool:
        lowered = key.lower()
        return lowered in SENSITIVE_FIELDS or any(f in lowered for f in _SENSITIVE_FRAGMENTS)


@lru_cache(maxsize=1)
def get_logging_settings() -> LoggingSettings:
    """Get cached LoggingSettings instance.

    Clear cache with ``get_logging_settings.cache_clear()`` for testing.
    """
    return LoggingSettings()


def _shared_processors() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        SensitiveDataProcessor(),
    ]


def _renderer(settings: LoggingSettings) -> Processor:
    if settings.use_json_logs:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=True)


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Configure structlog and route standard-library logging through it.

    Should be called once during startup (web lifespan or worker startup).
    Calling it again replaces the previously installed handler.

    Args:
        settings: Optional LoggingSettings instance. If not provided,
            settings are loaded from environment variables.
    """
    if settings is None:
        settings = get_logging_settings()

    renderer = _renderer(settings)

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(settings.log_level_int),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Domain modules log through the standard library with ``extra=`` context.
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_logger_name,
            structlog.stdlib.ExtraAdder(),
            *_shared_processors(),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )
    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(settings.log_level_int)


def get_logger(name: str | None = None) -> structlog.typing.WrappedLogger:
    """Get a structlog logger bound to the given name.

    Args:
        name: Logger name (typically __name__ from calling module).
            If None, returns unbound logger.
    """
    logger = structlog.get_logger()
    if name is not None:
        logger = logger.bind(logger=name)
    return logger
