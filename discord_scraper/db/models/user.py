"""Discord User ORM model.

Users are created lazily from message authors. The first row written for a
user ID is kept; later sightings of the same ID are ignored.
"""

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from discord_scraper.db.base import Base

if TYPE_CHECKING:
    from discord_scraper.db.models.message import Message


class User(Base):
    """Discord user, as seen in message author objects."""

    __tablename__ = "user"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    username: Mapped[str] = mapped_column(String, nullable=False)

    # Legacy discriminator (e.g. "1234"); "0" for accounts on the new
    # username system.
    discriminator: Mapped[str] = mapped_column(String, nullable=False)

    messages: Mapped[list["Message"]] = relationship(
        "Message",
        back_populates="author",
        viewonly=True,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
