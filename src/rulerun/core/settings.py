"""
Central configuration for rulerun.

A single typed settings object read from environment variables (12-factor
style) with pydantic-settings.

Usage:

    from rulerun.core.settings import get_settings

    settings = get_settings()
    polling = settings.polling_config()

The API key is held as a SecretStr so it never shows up in repr() or logs.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rulerun.protocol.models import (
    DEFAULT_PAGE_SIZE,
    DEFAULT_POLL_INTERVAL,
    DEFAULT_TIMEOUT,
    PollingConfig,
)


class RuleRunSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="RULERUN_", extra="ignore")

    url: Optional[str] = Field(
        default=None,
        description="Base URL of the rules API, e.g. https://api.example.com",
    )
    api_key: Optional[SecretStr] = Field(
        default=None,
        description="Bearer token sent as 'Authorization: Bearer <token>'.",
    )
    poll_interval: int = Field(
        default=DEFAULT_POLL_INTERVAL,
        gt=0,
        description="Seconds to wait between status checks.",
    )
    timeout: int = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="Maximum seconds to spend polling an execution.",
    )
    page_size: int = Field(
        default=DEFAULT_PAGE_SIZE,
        gt=0,
        description="Default page size for rule listings.",
    )
    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG/INFO/WARNING/ERROR).",
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        v = (v or "INFO").upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            return "INFO"
        return v

    @field_validator("url")
    @classmethod
    def _strip_url(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip().rstrip("/")
        return v or None

    def credential(self) -> Optional[str]:
        return self.api_key.get_secret_value() if self.api_key is not None else None

    def polling_config(self) -> PollingConfig:
        return PollingConfig(interval_seconds=self.poll_interval, timeout_seconds=self.timeout)


@lru_cache(maxsize=1)
def get_settings() -> RuleRunSettings:
    """
    Cached accessor for RuleRunSettings.

    Usage:
        from rulerun.core.settings import get_settings
        settings = get_settings()
    """
    return RuleRunSettings()
