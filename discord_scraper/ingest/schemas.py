"""Pydantic schemas for Discord API payloads.

Only the fields the archive stores are declared; everything else in the
payload is ignored. A payload that fails validation is a DecodeError at
the client boundary.
"""

from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

# Snowflakes arrive as decimal strings and are compared numerically
Snowflake = Annotated[str, Field(pattern=r"^\d+$")]


class UserPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Snowflake
    username: str
    discriminator: str


class ChannelPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Snowflake
    guild_id: Snowflake | None = None
    name: str | None = None


class MessagePayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Snowflake
    channel_id: Snowflake
    author: UserPayload
    content: str
    timestamp: str


class ErrorPayload(BaseModel):
    """Error body returned with non-2xx responses."""

    model_config = ConfigDict(extra="ignore")

    message: str
    code: int


MessagePage = TypeAdapter(list[MessagePayload])
