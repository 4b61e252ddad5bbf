"""
Runtime configuration for the test utilities.

Configuration via environment variables:

- ``DAZZLE_TESTUTILS_STRICT_OVERRIDES``: ``1``/``true`` makes Simulate reject
  overrides of dispatch-managed event fields instead of ignoring them
  (default: ``0``)
- ``DAZZLE_TESTUTILS_LOG_LEVEL``: log level applied by the CLI
  (default: ``WARNING``)
"""

from __future__ import annotations

import os
from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_LOG_LEVEL = "WARNING"

_TRUTHY = ("1", "true", "yes", "on")


class TestUtilsConfig(BaseModel):
    """Process-wide settings, read once from the environment."""

    __test__ = False

    model_config = ConfigDict(frozen=True)

    strict_overrides: bool = Field(
        default=False,
        description="Raise instead of warn when overrides name dispatch-managed fields",
    )
    log_level: str = Field(default=DEFAULT_LOG_LEVEL, description="CLI log level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalise and check the level name."""
        level = v.strip().upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level '{v}'")
        return level

    @classmethod
    def from_env(cls) -> TestUtilsConfig:
        """Build a config from ``DAZZLE_TESTUTILS_*`` environment variables."""
        return cls(
            strict_overrides=os.environ.get("DAZZLE_TESTUTILS_STRICT_OVERRIDES", "0")
            .strip()
            .lower()
            in _TRUTHY,
            log_level=os.environ.get("DAZZLE_TESTUTILS_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )


@lru_cache(maxsize=1)
def get_config() -> TestUtilsConfig:
    """Return the cached process-wide config."""
    return TestUtilsConfig.from_env()


def reset_config() -> None:
    """Drop the cached config so the next get_config() re-reads the environment."""
    get_config.cache_clear()
