"""Runtime settings for the schedule feed."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Any, Optional

from voicehub.core.config import Config
from voicehub.core.errors import ConfigError
from voicehub.core.fetcher import DEFAULT_TIMEOUT_SECONDS
from voicehub.refresh.policy import (
    COOLDOWN_CHECK_INTERVAL_SECONDS,
    COOLDOWN_SECONDS,
    MAX_RETRY,
    NORMAL_INTERVAL_SECONDS,
)

DEFAULT_API_URL = "https://voicehub.lao-shui.top/api/songs/public"
DEFAULT_LABEL = "Broadcast Schedule"


class FeedSettings:
    """Container for the settings the refresher reads.

    The endpoint URL resolves as ``VOICEHUB_API_URL`` > ``feed.url`` in the
    YAML file > :data:`DEFAULT_API_URL`. A blank value at any level falls
    through to the next one.
    """

    def __init__(self, api_url: Optional[str] = None) -> None:
        self.api_url: str = self._resolve_url(api_url)
        self.label: str = str(Config.get("feed", "label", default=DEFAULT_LABEL))
        self.timeout_seconds: float = self._positive_float("feed", "timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
        self.max_retries: int = self._non_negative_int("refresh", "max_retries", MAX_RETRY)
        self.cooldown_minutes: int = self._non_negative_int("refresh", "cooldown_minutes", COOLDOWN_SECONDS // 60)
        self.interval_seconds: float = self._positive_float("refresh", "interval_seconds", NORMAL_INTERVAL_SECONDS)
        self.cooldown_check_seconds: float = self._positive_float("refresh", "cooldown_check_seconds", COOLDOWN_CHECK_INTERVAL_SECONDS)

    @staticmethod
    def _resolve_url(override: Optional[str]) -> str:
        for candidate in (override, os.getenv("VOICEHUB_API_URL"), Config.get("feed", "url")):
            if candidate and str(candidate).strip():
                return str(candidate).strip()
        return DEFAULT_API_URL

    @staticmethod
    def _raw(section: str, key: str, default: Any) -> Any:
        return Config.get(section, key, default=default)

    def _positive_float(self, section: str, key: str, default: float) -> float:
        raw = self._raw(section, key, default)
        try:
            value = float(raw)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"{section}.{key} must be a number, got {raw!r}", key=f"{section}.{key}") from exc
        if value <= 0:
            raise ConfigError(f"{section}.{key} must be positive, got {value}", key=f"{section}.{key}")
        return value

    def _non_negative_int(self, section: str, key: str, default: int) -> int:
        raw = self._raw(section, key, default)
        try:
            value = int(raw)
        except (TypeError, ValueError) as exc:
            raise ConfigError(f"{section}.{key} must be an integer, got {raw!r}", key=f"{section}.{key}") from exc
        if value < 0:
            raise ConfigError(f"{section}.{key} must be non-negative, got {value}", key=f"{section}.{key}")
        return value


@lru_cache(maxsize=1)
def get_feed_settings() -> FeedSettings:
    """Return cached feed settings instance."""

    return FeedSettings()


__all__ = ["FeedSettings", "get_feed_settings", "DEFAULT_API_URL", "DEFAULT_LABEL"]
