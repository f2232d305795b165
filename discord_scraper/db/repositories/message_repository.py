"""Message repository for page-sized database writes.

Handles insert-or-ignore batches for:
- Users (message authors)
- Messages

Each batch runs in its own transaction: the whole page commits, or
nothing from it does.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from discord_scraper.core.errors import StoreError
from discord_scraper.db.models import Message, User
from discord_scraper.ingest.logger import logger
from discord_scraper.ingest.mappers import extract_authors, map_messages
from discord_scraper.ingest.schemas import MessagePayload


def get_channel_message_count(session: Session, channel_id: str) -> int:
    """Get the count of stored messages in a channel.

    Args:
        session: Database session
        channel_id: The channel ID to count messages for

    Returns:
        Number of messages in the channel
    """
    stmt = (
        select(func.count())
        .select_from(Message)
        .where(Message.channel_id == channel_id)
    )
    try:
        with session.begin():
            return session.execute(stmt).scalar() or 0
    except SQLAlchemyError as e:
        raise StoreError("get_channel_message_count", str(e)) from e


def insert_users(session: Session, users: list[User]) -> int:
    """Insert users with deduplication, ignoring IDs already stored.

    Args:
        session: Database session
        users: List of User ORM instances to insert

    Returns:
        Number of users that were not stored before
    """
    if not users:
        return 0

    # Deduplicate by id
    seen_ids: set[str] = set()
    unique_users: list[User] = []
    for user in users:
        if user.id not in seen_ids:
            seen_ids.add(user.id)
            unique_users.append(user)

    values = [
        {
            "id": u.id,
            "username": u.username,
            "discriminator": u.discriminator,
        }
        for u in unique_users
    ]

    stmt = (
        sqlite_insert(User)
        .values(values)
        .on_conflict_do_nothing(index_elements=["id"])
        .returning(User.username)
    )
    try:
        with session.begin():
            inserted = list(session.execute(stmt).scalars())
    except SQLAlchemyError as e:
        raise StoreError("insert_users", str(e)) from e

    logger.inserting_users(len(unique_users), inserted)
    return len(inserted)


def insert_messages(session: Session, messages: list[Message]) -> int:
    """Insert messages (on conflict do nothing).

    Args:
        session: Database session
        messages: List of Message ORM instances to insert

    Returns:
        Number of messages in the batch
    """
    if not messages:
        return 0

    logger.inserting_messages(len(messages))

    values = [
        {
            "id": m.id,
            "channel_id": m.channel_id,
            "author_id": m.author_id,
            "content": m.content,
            "timestamp": m.timestamp,
        }
        for m in messages
    ]

    stmt = (
        sqlite_insert(Message)
        .values(values)
        .on_conflict_do_nothing(index_elements=["id"])
    )
    try:
        with session.begin():
            session.execute(stmt)
    except SQLAlchemyError as e:
        raise StoreError("insert_messages", str(e)) from e

    return len(messages)


def persist_messages_batch(
    session: Session,
    messages_data: list[MessagePayload],
) -> int:
    """Persist one page of messages and their authors.

    Authors are written before messages so every message's author_id
    already exists when the message row lands.

    Args:
        session: Database session
        messages_data: Decoded message payloads from Discord API

    Returns:
        Number of messages processed
    """
    if not messages_data:
        return 0

    insert_users(session, extract_authors(messages_data))
    return insert_messages(session, map_messages(messages_data))
