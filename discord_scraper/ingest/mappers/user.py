"""User API payload to ORM mapper."""

from __future__ import annotations

from collections.abc import Iterable

from discord_scraper.db.models import User
from discord_scraper.ingest.schemas import MessagePayload, UserPayload


def map_user(data: UserPayload) -> User:
    """Convert a user payload to a User ORM instance."""
    return User(
        id=data.id,
        username=data.username,
        discriminator=data.discriminator,
    )


def extract_authors(messages: Iterable[MessagePayload]) -> list[User]:
    """Extract the author of every message in a page.

    Args:
        messages: Decoded message objects from Discord API

    Returns:
        List of User ORM instances (may contain duplicates by id)
    """
    return [map_user(m.author) for m in messages]
