"""Main orchestration for the crawl pipeline.

Processes the requested channels one at a time: channel metadata first,
then the full message backfill. The first error aborts the whole run.
"""

from __future__ import annotations

import httpx
from sqlalchemy.orm import Session

from discord_scraper.config.settings import ScraperSettings
from discord_scraper.core import BaseOrchestrator
from discord_scraper.db.repositories import get_channel_message_count, insert_channel
from discord_scraper.ingest.backfill import backfill_channel
from discord_scraper.ingest.client import DiscordClient
from discord_scraper.ingest.logger import logger
from discord_scraper.ingest.mappers import map_channel


class CrawlOrchestrator(BaseOrchestrator):
    """Orchestrates the full crawl pipeline."""

    def __init__(
        self,
        settings: ScraperSettings,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        super().__init__(settings.db_path)
        self.settings = settings
        self.transport = transport
        # Stats
        self.channels_processed = 0
        self.messages_ingested = 0
        self.pages_fetched = 0

    def _make_client(self) -> DiscordClient:
        return DiscordClient(
            token=self.settings.require_token(),
            user_agent=self.settings.user_agent,
            base_url=self.settings.base_url,
            retry_pad=self.settings.retry_pad,
            max_rate_limit_retries=self.settings.max_rate_limit_retries,
            timeout=self.settings.timeout,
            transport=self.transport,
        )

    def _run_pipeline(self, session: Session, channel_ids: list[str]) -> None:
        """Execute the crawl, strictly one channel after another."""
        with self._make_client() as client:
            for channel_id in channel_ids:
                self._process_channel(client, session, channel_id)

    def _process_channel(
        self, client: DiscordClient, session: Session, channel_id: str
    ) -> None:
        """Fetch and store a channel, then walk its whole history."""
        channel_data = client.get_channel(channel_id)
        logger.channel_start(channel_id, channel_data.name)

        insert_channel(session, map_channel(channel_data))

        result = backfill_channel(
            client, session, channel_id, page_size=self.settings.page_size
        )
        self.channels_processed += 1
        self.messages_ingested += result.messages_count
        self.pages_fetched += result.pages_fetched

        if result.messages_count == 0:
            logger.channel_empty()
        else:
            logger.channel_complete(
                result.messages_count, get_channel_message_count(session, channel_id)
            )

    def _log_summary(self, elapsed: float) -> None:
        """Log the final crawl summary."""
        logger.summary(
            channels=self.channels_processed,
            messages=self.messages_ingested,
            pages=self.pages_fetched,
            elapsed=elapsed,
        )


def run_crawl(settings: ScraperSettings, channel_ids: list[str]) -> None:
    """Entry point for running the crawl pipeline."""
    settings.require_token()
    orchestrator = CrawlOrchestrator(settings)
    orchestrator.run(channel_ids)
