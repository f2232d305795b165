"""Error taxonomy for the scraper.

Every failure the crawl can surface is a subclass of ScraperError, so the
CLI can tell configuration problems apart from mid-crawl failures without
inspecting message strings. RateLimited never leaves DiscordClient.send.
"""

from __future__ import annotations


class ScraperError(Exception):
    """Base class for all scraper errors."""


class ConfigError(ScraperError):
    """Raised when configuration is missing or invalid (e.g. no token)."""


class TransportError(ScraperError):
    """Raised when the HTTP request could not be completed."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"While executing request {url}: {reason}")


class ApiError(ScraperError):
    """Raised when Discord rejects a request with a non-retryable status."""

    def __init__(
        self,
        url: str,
        message: str,
        code: int | None = None,
        status_code: int | None = None,
    ) -> None:
        self.url = url
        self.message = message
        self.code = code
        self.status_code = status_code
        super().__init__(f"While executing request {url}: {message}")


class RateLimited(ScraperError):
    """Raised when rate limited (for internal use)."""

    def __init__(self, retry_after: float) -> None:
        self.retry_after = retry_after
        super().__init__(f"Rate limited, retry after {retry_after}s")


class DecodeError(ScraperError):
    """Raised when a response payload does not match the expected schema."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        self.reason = reason
        super().__init__(f"Could not decode response from {url}: {reason}")


class StoreError(ScraperError):
    """Raised when a write to the local store fails."""

    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        self.reason = reason
        super().__init__(f"Store error during {operation}: {reason}")
