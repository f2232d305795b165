"""Channel repository for database operations."""

from __future__ import annotations

from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from discord_scraper.core.errors import StoreError
from discord_scraper.db.models import Channel
from discord_scraper.ingest.logger import logger


def insert_channel(session: Session, channel: Channel) -> None:
    """Insert a channel record, ignoring it if the ID already exists.

    A single statement committed on its own; the first write for a
    channel ID wins.

    Args:
        session: Database session
        channel: Channel ORM model instance to insert
    """
    logger.inserting_channel(channel.name or "")

    stmt = (
        sqlite_insert(Channel)
        .values(id=channel.id, guild_id=channel.guild_id, name=channel.name)
        .on_conflict_do_nothing(index_elements=["id"])
    )
    try:
        with session.begin():
            session.execute(stmt)
    except SQLAlchemyError as e:
        raise StoreError("insert_channel", str(e)) from e
