"""Tests for payload schemas and ORM mappers."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from discord_scraper.ingest.mappers import (
    extract_authors,
    map_channel,
    map_message,
    map_messages,
    map_user,
)
from discord_scraper.ingest.schemas import (
    ChannelPayload,
    ErrorPayload,
    MessagePage,
    MessagePayload,
    UserPayload,
)

from conftest import make_message


class TestSchemas:
    def test_message_ignores_unknown_fields(self):
        raw = make_message(5)
        raw["reactions"] = [{"count": 1}]

        payload = MessagePayload.model_validate(raw)

        assert payload.id == "5"
        assert not hasattr(payload, "reactions")

    def test_message_requires_author(self):
        raw = make_message(5)
        del raw["author"]

        with pytest.raises(ValidationError):
            MessagePayload.model_validate(raw)

    def test_user_requires_discriminator(self):
        with pytest.raises(ValidationError):
            UserPayload.model_validate({"id": "1", "username": "a"})

    @pytest.mark.parametrize("bad_id", ["abc", "12a", "-5", ""])
    def test_ids_must_be_decimal_snowflakes(self, bad_id):
        with pytest.raises(ValidationError):
            UserPayload.model_validate({"id": bad_id, "username": "a", "discriminator": "0"})
        with pytest.raises(ValidationError):
            ChannelPayload.model_validate({"id": bad_id, "type": 0})

    def test_message_page_from_json(self):
        page = MessagePage.validate_json(b"[]")

        assert page == []

    def test_error_payload(self):
        err = ErrorPayload.model_validate_json(b'{"message": "Unknown Channel", "code": 10003}')

        assert err.message == "Unknown Channel"
        assert err.code == 10003


class TestMapChannel:
    def test_guild_channel(self):
        channel = map_channel(
            ChannelPayload.model_validate({"id": "42", "type": 0, "guild_id": "7", "name": "general"})
        )

        assert channel.id == "42"
        assert channel.guild_id == "7"
        assert channel.name == "general"

    def test_dm_channel_keeps_nulls(self):
        channel = map_channel(ChannelPayload.model_validate({"id": "42", "type": 1}))

        assert channel.guild_id is None
        assert channel.name is None


class TestMapMessage:
    def test_fields(self):
        raw = make_message(9, channel_id="42", author_id="1000", content="hi")

        message = map_message(MessagePayload.model_validate(raw))

        assert message.id == "9"
        assert message.channel_id == "42"
        assert message.author_id == "1000"
        assert message.content == "hi"
        assert message.timestamp == raw["timestamp"]

    def test_empty_content_is_kept(self):
        message = map_message(MessagePayload.model_validate(make_message(9, content="")))

        assert message.content == ""

    def test_map_messages_preserves_order(self):
        page = [MessagePayload.model_validate(make_message(i)) for i in (3, 2, 1)]

        assert [m.id for m in map_messages(page)] == ["3", "2", "1"]


class TestUsers:
    def test_map_user(self):
        user = map_user(UserPayload(id="1", username="alice", discriminator="1234"))

        assert (user.id, user.username, user.discriminator) == ("1", "alice", "1234")

    def test_extract_authors_keeps_duplicates(self):
        page = [
            MessagePayload.model_validate(make_message(i, author_id="1000"))
            for i in (3, 2, 1)
        ]

        authors = extract_authors(page)

        assert [a.id for a in authors] == ["1000", "1000", "1000"]
