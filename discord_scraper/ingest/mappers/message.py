"""Message API payload to ORM mapper."""

from __future__ import annotations

from collections.abc import Iterable

from discord_scraper.db.models import Message
from discord_scraper.ingest.schemas import MessagePayload


def map_message(data: MessagePayload) -> Message:
    """Convert a message payload to a Message ORM instance.

    Only plain text content is kept; attachments, embeds and reactions
    are not archived.

    Args:
        data: Decoded message object from Discord API

    Returns:
        Message ORM instance (not yet added to session)
    """
    return Message(
        id=data.id,
        channel_id=data.channel_id,
        author_id=data.author.id,
        content=data.content,
        timestamp=data.timestamp,
    )


def map_messages(messages: Iterable[MessagePayload]) -> list[Message]:
    """Map a page of message payloads, preserving API order."""
    return [map_message(m) for m in messages]
