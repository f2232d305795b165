"""Channel API payload to ORM mapper."""

from __future__ import annotations

from discord_scraper.db.models import Channel
from discord_scraper.ingest.schemas import ChannelPayload


def map_channel(data: ChannelPayload) -> Channel:
    """Convert a channel payload to a Channel ORM instance.

    Args:
        data: Decoded channel object from Discord API

    Returns:
        Channel ORM instance (not yet added to session)
    """
    return Channel(
        id=data.id,
        guild_id=data.guild_id,
        name=data.name,
    )
