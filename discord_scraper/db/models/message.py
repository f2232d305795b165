"""Discord Message ORM model.

Messages are append-only: a message ID is inserted once and re-inserts are
dropped, which is what makes re-running a crawl safe.
"""

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from discord_scraper.db.base import Base

if TYPE_CHECKING:
    from discord_scraper.db.models.channel import Channel
    from discord_scraper.db.models.user import User


class Message(Base):
    """Plain text message in a channel."""

    __tablename__ = "message"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    channel_id: Mapped[str] = mapped_column(
        String, ForeignKey("channel.id"), nullable=False
    )
    author_id: Mapped[str] = mapped_column(
        String, ForeignKey("user.id"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)

    # ISO-8601 timestamp exactly as sent by the API.
    timestamp: Mapped[str] = mapped_column(String, nullable=False)

    channel: Mapped["Channel"] = relationship(
        "Channel", back_populates="messages", viewonly=True
    )
    author: Mapped["User"] = relationship(
        "User", back_populates="messages", viewonly=True
    )

    __table_args__ = (Index("ix_message_channel_id", "channel_id"),)

    def __repr__(self) -> str:
        return f"<Message(id={self.id}, channel_id={self.channel_id})>"
