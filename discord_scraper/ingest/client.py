"""Discord REST API client with rate limit handling.

This module provides a blocking HTTP client for Discord's REST API with:
- Automatic rate limit handling (429 responses, Retry-After + pad)
- Decoding of responses into pydantic payload schemas
- Conversion of transport and API failures into the scraper error types
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import ValidationError

from discord_scraper.config.settings import BASE_URL, DEFAULT_USER_AGENT
from discord_scraper.core.errors import (
    ApiError,
    DecodeError,
    RateLimited,
    TransportError,
)
from discord_scraper.ingest.logger import logger
from discord_scraper.ingest.schemas import (
    ChannelPayload,
    ErrorPayload,
    MessagePage,
    MessagePayload,
)


# Safety margin added to every Retry-After wait
RETRY_PAD = 0.1  # seconds
# Used when a 429 arrives without a usable Retry-After header
DEFAULT_RETRY_AFTER = 1.0  # seconds
MAX_PAGE_SIZE = 100


def _retry_after(response: httpx.Response) -> float:
    """Read the server-supplied wait from a 429 response."""
    try:
        retry_after = float(response.headers["Retry-After"])
    except (KeyError, TypeError, ValueError):
        return DEFAULT_RETRY_AFTER
    if not math.isfinite(retry_after):
        return DEFAULT_RETRY_AFTER
    return max(retry_after, 0.0)


@dataclass
class DiscordClient:
    """Blocking Discord REST API client.

    Throttled requests are retried transparently; every other failure is
    raised to the caller. Use as a context manager.
    """

    token: str
    user_agent: str = DEFAULT_USER_AGENT
    base_url: str = BASE_URL
    retry_pad: float = RETRY_PAD
    # None means wait out throttling for as long as the server asks
    max_rate_limit_retries: int | None = None
    timeout: float = 30.0
    transport: httpx.BaseTransport | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._client: httpx.Client | None = None

    @property
    def headers(self) -> dict[str, str]:
        """Build request headers."""
        return {
            "Authorization": self.token,
            "User-Agent": self.user_agent,
        }

    def __enter__(self) -> "DiscordClient":
        self._client = httpx.Client(
            base_url=self.base_url,
            headers=self.headers,
            timeout=self.timeout,
            transport=self.transport,
        )
        return self

    def __exit__(self, *args: Any) -> None:
        if self._client:
            self._client.close()
            self._client = None

    def send(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """GET `path`, sleeping through rate limits until a final answer.

        Returns:
            The 200 response.

        Raises:
            TransportError: The request could not be completed.
            ApiError: Discord answered with a non-retryable status, or the
                optional rate limit retry cap was exceeded.
            DecodeError: The error body was not a Discord error object.
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use with.")

        url = str(self._client.build_request("GET", path, params=params).url)
        rate_limit_retries = 0

        while True:
            try:
                return self._send_once(url, path, params)
            except RateLimited as e:
                rate_limit_retries += 1
                if (
                    self.max_rate_limit_retries is not None
                    and rate_limit_retries > self.max_rate_limit_retries
                ):
                    raise ApiError(
                        url, "Max rate limit retries exceeded", status_code=429
                    ) from e
                sleep_for = e.retry_after + self.retry_pad
                logger.rate_limit(sleep_for)
                time.sleep(sleep_for)

    def _send_once(
        self, url: str, path: str, params: dict[str, Any] | None
    ) -> httpx.Response:
        """Issue one GET and classify the response."""
        assert self._client is not None
        try:
            response = self._client.get(path, params=params)
        except httpx.TransportError as e:
            raise TransportError(url, str(e) or e.__class__.__name__) from e

        if response.status_code == 200:
            return response

        if response.status_code == 429:
            raise RateLimited(_retry_after(response))

        try:
            error = ErrorPayload.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(
                url, f"HTTP {response.status_code} with unreadable error body"
            ) from e
        raise ApiError(url, error.message, error.code, response.status_code)

    # -------------------------------------------------------------------------
    # Channel endpoints
    # -------------------------------------------------------------------------

    def get_channel(self, channel_id: str) -> ChannelPayload:
        """Fetch channel information."""
        response = self.send(f"/channels/{channel_id}")
        try:
            return ChannelPayload.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(str(response.request.url), str(e)) from e

    # -------------------------------------------------------------------------
    # Message endpoints
    # -------------------------------------------------------------------------

    def get_messages(
        self,
        channel_id: str,
        before: str | None = None,
        limit: int = MAX_PAGE_SIZE,
    ) -> list[MessagePayload]:
        """Fetch one page of messages from a channel.

        Args:
            channel_id: The channel to fetch from
            before: Get messages before this message ID
            limit: Max messages to return (1-100)

        Returns:
            List of messages, ordered by ID descending (newest first)
        """
        params: dict[str, Any] = {"limit": max(1, min(limit, MAX_PAGE_SIZE))}
        if before is not None:
            params["before"] = before
        response = self.send(f"/channels/{channel_id}/messages", params=params)
        try:
            return MessagePage.validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(str(response.request.url), str(e)) from e
