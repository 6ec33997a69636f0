"""
Schedule Fetcher - Feed Download Module
=======================================

Async HTTP client for the VoiceHub schedule feed with:
- Async requests via httpx
- A fixed per-request timeout
- Distinct transport / timeout / parse failures
- Cancellation through the owning asyncio task
"""

import asyncio
import json
from typing import Any, List, Optional

import httpx

from voicehub.core.errors import FeedParseError, FeedTimeoutError, FeedTransportError
from voicehub.models.schedule import ScheduleEntry
from voicehub.utils.logger import get_logger, log_execution_time

log = get_logger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


def parse_feed(payload: Any, *, url: Optional[str] = None) -> List[ScheduleEntry]:
    """
    Turn a decoded JSON payload into schedule entries.

    Args:
        payload: Result of ``json.loads`` on the response body
        url: Source URL, attached to errors for diagnostics

    Returns:
        Entries in feed order. ``null`` and ``[]`` both give an empty list.
    """
    if payload is None:
        return []
    if not isinstance(payload, list):
        raise FeedParseError(
            f"Expected a JSON array, got {type(payload).__name__}",
            url=url,
            phase="parse",
        )

    entries: List[ScheduleEntry] = []
    for index, item in enumerate(payload):
        try:
            entries.append(ScheduleEntry.from_dict(item))
        except ValueError as e:
            raise FeedParseError(f"Invalid entry at index {index}: {e}", url=url, phase="parse", index=index) from e
    return entries


class ScheduleFetcher:
    """
    Downloads and decodes the schedule feed.

    The client is created lazily and owned by this instance. Cancel the
    awaiting task to abort an in-flight request.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the fetcher

        Args:
            timeout: Total request timeout in seconds
            client: Pre-built client (tests, shared connection pools)
            transport: Custom transport for the internally created client
        """
        self.timeout = timeout
        self._transport = transport
        self._client = client
        log.debug(f"ScheduleFetcher initialized, timeout={timeout}s")

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = self._create_client()
        return self._client

    def _create_client(self) -> httpx.AsyncClient:
        client_kwargs = {
            "timeout": httpx.Timeout(self.timeout),
            "follow_redirects": True,
            "headers": {"Accept": "application/json"},
        }
        if self._transport is not None:
            client_kwargs["transport"] = self._transport
        return httpx.AsyncClient(**client_kwargs)

    async def close(self):
        """Close the underlying HTTP client"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.debug("ScheduleFetcher client closed")

    @log_execution_time
    async def fetch(self, url: str) -> List[ScheduleEntry]:
        """
        Fetch the feed once.

        Args:
            url: Feed endpoint

        Returns:
            List of ScheduleEntry, possibly empty

        Raises:
            FeedTimeoutError: the request exceeded ``timeout``
            FeedTransportError: connection failure or non-2xx status
            FeedParseError: body is not a valid feed
        """
        log.debug(f"Fetching schedule feed from {url}")
        try:
            response = await asyncio.wait_for(self.client.get(url), timeout=self.timeout)
            response.raise_for_status()
        except (httpx.TimeoutException, asyncio.TimeoutError) as e:
            raise FeedTimeoutError(
                f"Timed out after {self.timeout}s fetching {url}",
                url=url,
                phase="fetch",
                timeout=self.timeout,
            ) from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            raise FeedTransportError(
                f"Server returned {status} for {url}",
                url=url,
                phase="fetch",
                status_code=status,
            ) from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise FeedTransportError(f"Request to {url} failed: {e!r}", url=url, phase="fetch") from e

        try:
            payload = json.loads(response.content)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise FeedParseError(f"Response from {url} is not valid JSON: {e}", url=url, phase="parse") from e

        entries = parse_feed(payload, url=url)
        log.info(f"Fetched {len(entries)} schedule entries from {url}")
        return entries

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
