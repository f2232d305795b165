"""Backfill logic for downloading a channel's full message history.

Backfill fetches messages from newest to oldest using the `before`
parameter. It continues until Discord returns an empty page (channel
exhausted); a short page does not end the walk.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from discord_scraper.core.errors import DecodeError
from discord_scraper.db.repositories import persist_messages_batch
from discord_scraper.ingest.logger import logger
from discord_scraper.ingest.schemas import MessagePayload
from discord_scraper.utils.snowflake import is_older

if TYPE_CHECKING:
    from discord_scraper.ingest.client import DiscordClient


@dataclass
class BackfillResult:
    """Result of a backfill operation."""

    messages_count: int
    pages_fetched: int


def fetch_page(
    client: "DiscordClient",
    channel_id: str,
    before: str | None = None,
    page_size: int = 100,
) -> list[MessagePayload]:
    """Fetch one page of messages older than `before` (newest page if None)."""
    return client.get_messages(channel_id=channel_id, before=before, limit=page_size)


def backfill_channel(
    client: "DiscordClient",
    session: Session,
    channel_id: str,
    page_size: int = 100,
) -> BackfillResult:
    """Backfill the full message history of a channel.

    Each page is persisted (authors, then messages) before the next one is
    requested. The cursor for the next request is the ID of the last
    (oldest) message in the page just stored.

    Args:
        client: Discord API client
        session: Database session
        channel_id: Channel to backfill
        page_size: Messages per API call (max 100)

    Returns:
        BackfillResult with total messages and number of page fetches
    """
    before: str | None = None
    total_messages = 0

    messages = fetch_page(client, channel_id, before, page_size)
    pages_fetched = 1

    while messages:
        total_messages += persist_messages_batch(session, messages)

        oldest_id = messages[-1].id
        if before is not None and not is_older(oldest_id, before):
            raise DecodeError(
                f"/channels/{channel_id}/messages",
                f"page before {before} ended at {oldest_id}, which is not older",
            )
        before = oldest_id

        logger.page_progress(total_messages, before)

        messages = fetch_page(client, channel_id, before, page_size)
        pages_fetched += 1

    return BackfillResult(messages_count=total_messages, pages_fetched=pages_fetched)
