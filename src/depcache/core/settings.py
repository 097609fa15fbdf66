"""Engine-wide settings resolved from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

_DISABLE_LOGGING_ENV = "DEPCACHE_DISABLE_LOGGING"
_LOG_LEVEL_ENV = "DEPCACHE_LOG_LEVEL"
_DEFAULT_LOG_LEVEL = "WARNING"


def _env_flag(name: str) -> bool:
    """Return True if the environment variable holds a truthy flag."""
    raw = os.getenv(name, "").strip().lower()
    return raw in {"1", "true", "yes"}


def _env_log_level(name: str) -> str:
    """Return a valid logging level name, falling back to the default."""
    raw = os.getenv(name, "").strip().upper()
    if raw and isinstance(logging.getLevelName(raw), int):
        return raw
    return _DEFAULT_LOG_LEVEL


@dataclass(frozen=True)
class CacheSettings:
    """
    Settings shared by every resolution and invalidation call.

    Attributes:
        disable_logging: Suppress all dependency diagnostics, regardless of
            the per-query policy.
        log_level: Default level used by the CLI when configuring logging.
    """

    disable_logging: bool = False
    log_level: str = _DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> CacheSettings:
        """Build settings from `DEPCACHE_*` environment variables."""
        return cls(
            disable_logging=_env_flag(_DISABLE_LOGGING_ENV),
            log_level=_env_log_level(_LOG_LEVEL_ENV),
        )
