"""Shared fixtures for discord-scraper tests."""

from __future__ import annotations

import re
from collections.abc import Iterator
from pathlib import Path

import httpx
import pytest
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from discord_scraper.db.engine import dispose_engines, get_engine, get_session_factory
from discord_scraper.db.models import Base


CHANNEL_PATH = re.compile(r"/channels/(?P<channel_id>[^/]+)(?P<messages>/messages)?$")


def count_rows(session: Session, model: type) -> int:
    """Count rows of a model without leaving a transaction open."""
    with session.begin():
        return session.scalar(select(func.count()).select_from(model)) or 0


def make_message(
    message_id: int,
    channel_id: str = "42",
    author_id: str | None = None,
    content: str | None = None,
) -> dict:
    """Build a raw message object as Discord sends it."""
    author_id = author_id or str(message_id % 7 + 1000)
    return {
        "id": str(message_id),
        "channel_id": channel_id,
        "author": {
            "id": author_id,
            "username": f"user_{author_id}",
            "discriminator": "0",
            "avatar": None,
        },
        "content": content if content is not None else f"message {message_id}",
        "timestamp": "2023-01-15T10:30:00.000000+00:00",
        "attachments": [],
        "embeds": [],
    }


class FakeDiscordApi:
    """In-memory stand-in for the Discord channel endpoints.

    Serves channel metadata and newest-first message pages honouring
    `limit` and `before`, and records every request it receives.
    """

    def __init__(self) -> None:
        self.channels: dict[str, dict] = {}
        self.messages: dict[str, list[dict]] = {}
        self.requests: list[httpx.Request] = []
        # Responses served before normal routing, one per request
        self.queued: list[httpx.Response | Exception] = []

    def add_channel(
        self, channel_id: str, message_count: int, name: str | None = None
    ) -> None:
        # Each channel gets its own id range so ids never collide across channels
        offset = 100_000 * len(self.channels)
        self.channels[channel_id] = {
            "id": channel_id,
            "type": 0,
            "guild_id": "7",
            "name": name or f"channel-{channel_id}",
        }
        self.messages[channel_id] = [
            make_message(offset + i, channel_id=channel_id)
            for i in range(message_count, 0, -1)
        ]

    @property
    def message_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.endswith("/messages")]

    def cursors(self) -> list[str | None]:
        return [r.url.params.get("before") for r in self.message_requests]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if self.queued:
            queued = self.queued.pop(0)
            if isinstance(queued, Exception):
                raise queued
            return queued

        match = CHANNEL_PATH.search(request.url.path)
        channel_id = match["channel_id"] if match else None
        if channel_id not in self.channels:
            return httpx.Response(404, json={"message": "Unknown Channel", "code": 10003})

        if not match["messages"]:
            return httpx.Response(200, json=self.channels[channel_id])

        before = request.url.params.get("before")
        limit = int(request.url.params.get("limit", 50))
        page = [
            m
            for m in self.messages[channel_id]
            if before is None or int(m["id"]) < int(before)
        ][:limit]
        return httpx.Response(200, json=page)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep real DISCORD_* variables and cached engines out of tests."""
    for name in (
        "DISCORD_AUTH_TOKEN",
        "DISCORD_DB_PATH",
        "DISCORD_USER_AGENT",
        "DISCORD_BASE_URL",
        "DISCORD_RETRY_PAD",
        "DISCORD_MAX_RATE_LIMIT_RETRIES",
        "DISCORD_PAGE_SIZE",
        "DISCORD_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)
    yield
    dispose_engines()


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "messages.db"


@pytest.fixture
def session(db_path: Path) -> Iterator[Session]:
    """Session on a fresh SQLite store with the schema created."""
    Base.metadata.create_all(get_engine(db_path))
    with get_session_factory(str(db_path))() as s:
        yield s


@pytest.fixture
def fake_api() -> FakeDiscordApi:
    return FakeDiscordApi()
