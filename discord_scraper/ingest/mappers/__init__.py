"""Mappers for converting Discord API payloads to ORM models."""

from discord_scraper.ingest.mappers.channel import map_channel
from discord_scraper.ingest.mappers.message import map_message, map_messages
from discord_scraper.ingest.mappers.user import extract_authors, map_user

__all__ = [
    "extract_authors",
    "map_channel",
    "map_message",
    "map_messages",
    "map_user",
]
