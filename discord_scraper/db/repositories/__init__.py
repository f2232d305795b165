"""Repository layer for database operations.

Provides clean separation between data access and crawl logic.
All insert-or-ignore writes are centralized here.
"""

from discord_scraper.db.repositories.channel_repository import insert_channel
from discord_scraper.db.repositories.message_repository import (
    get_channel_message_count,
    insert_messages,
    insert_users,
    persist_messages_batch,
)

__all__ = [
    "insert_channel",
    "insert_users",
    "insert_messages",
    "get_channel_message_count",
    "persist_messages_batch",
]
