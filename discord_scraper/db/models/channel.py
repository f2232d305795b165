"""Discord Channel ORM model.

Channels are written once per crawl run from a single metadata fetch and
never updated afterwards: a conflicting re-insert keeps the first row.
"""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from discord_scraper.db.base import Base

if TYPE_CHECKING:
    from discord_scraper.db.models.message import Message


class Channel(Base):
    """Discord channel metadata."""

    __tablename__ = "channel"

    # Discord snowflake ID, kept as the string the API sends.
    id: Mapped[str] = mapped_column(String, primary_key=True)

    # Parent guild. NULL for DMs and group DMs.
    guild_id: Mapped[str | None] = mapped_column(String, nullable=True)

    # NULL for DMs, which have no name.
    name: Mapped[str | None] = mapped_column(String, nullable=True)

    messages: Mapped[list["Message"]] = relationship(
        "Message",
        back_populates="channel",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<Channel(id={self.id}, name='{self.name}')>"
