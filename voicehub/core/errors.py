"""
VoiceHub error hierarchy for clear classification in logs and display states.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class FailureKind(str, Enum):
    """Why a fetch cycle failed. Drives the user-facing error text."""

    TRANSPORT = "transport"
    TIMEOUT = "timeout"
    PARSE = "parse"
    UNKNOWN = "unknown"


class VoiceHubError(Exception):
    """Base class for all VoiceHub errors."""

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        phase: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.url = url
        self.phase = phase
        self.details = details or {}

    def as_dict(self) -> Dict[str, Any]:
        """Serializable representation for logs."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "url": self.url,
            "phase": self.phase,
            "details": self.details,
        }


class FeedError(VoiceHubError):
    """Raised when the schedule feed could not be fetched or decoded."""

    kind: FailureKind = FailureKind.UNKNOWN

    def as_dict(self) -> Dict[str, Any]:
        payload = super().as_dict()
        payload["kind"] = self.kind.value
        return payload


class FeedTransportError(FeedError):
    """Connection, DNS or HTTP status failure."""

    kind = FailureKind.TRANSPORT

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        **kwargs,
    ) -> None:
        super().__init__(message, **kwargs)
        self.status_code = status_code
        if status_code is not None:
            self.details["status_code"] = status_code


class FeedTimeoutError(FeedError):
    """The request did not complete within the configured timeout."""

    kind = FailureKind.TIMEOUT

    def __init__(
        self,
        message: str,
        *,
        timeout: Optional[float] = None,
        **kwargs,
    ) -> None:
        super().__init__(message, **kwargs)
        self.timeout = timeout
        if timeout is not None:
            self.details["timeout"] = timeout


class FeedParseError(FeedError):
    """The payload is not a valid schedule feed."""

    kind = FailureKind.PARSE

    def __init__(
        self,
        message: str,
        *,
        index: Optional[int] = None,
        **kwargs,
    ) -> None:
        super().__init__(message, **kwargs)
        self.index = index
        if index is not None:
            self.details["index"] = index


class ConfigError(VoiceHubError):
    """Raised on missing/invalid configuration values."""

    def __init__(
        self,
        message: str,
        *,
        key: Optional[str] = None,
        **kwargs,
    ) -> None:
        super().__init__(message, **kwargs)
        self.key = key
        if key is not None:
            self.details["key"] = key


def classify_failure(exc: BaseException) -> FailureKind:
    """Map an exception raised during a cycle onto a FailureKind."""
    if isinstance(exc, FeedError):
        return exc.kind
    return FailureKind.UNKNOWN
