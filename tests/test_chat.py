"""
Tests for the Discord chat adapter.

The bot is replaced by a fake exposing ``get_partial_messageable``; Discord
errors are built from a stub HTTP response.
"""

from types import SimpleNamespace

import discord
import pytest

from soloqbot.services.chat import DiscordChatClient
from soloqbot.utils.exceptions import ChatPlatformError, ScoreboardPublishError


def http_error(cls, status, reason):
    return cls(SimpleNamespace(status=status, reason=reason), "")


class FakePartialMessage:
    def __init__(self, channel, message_id):
        self.channel = channel
        self.id = message_id

    async def edit(self, **kwargs):
        if self.channel.error is not None:
            raise self.channel.error
        self.channel.edits.append((self.id, kwargs))

    async def delete(self):
        if self.channel.error is not None:
            raise self.channel.error
        self.channel.deleted.append(self.id)


class FakeMessageable:
    def __init__(self, channel_id):
        self.id = channel_id
        self.sent = []
        self.edits = []
        self.deleted = []
        self.error = None

    async def send(self, content):
        if self.error is not None:
            raise self.error
        self.sent.append(content)
        return SimpleNamespace(id=5000 + len(self.sent))

    def get_partial_message(self, message_id):
        return FakePartialMessage(self, message_id)


class FakeBot:
    def __init__(self):
        self.channels = {}

    def get_partial_messageable(self, channel_id):
        return self.channels.setdefault(channel_id, FakeMessageable(channel_id))


@pytest.fixture
def fake_bot():
    return FakeBot()


@pytest.fixture
def discord_chat(fake_bot):
    return DiscordChatClient(fake_bot)


class TestCreateMessage:

    async def test_returns_new_message_id(self, discord_chat, fake_bot):
        message_id = await discord_chat.create_message(10, "Loading...")

        assert message_id == 5001
        assert fake_bot.channels[10].sent == ["Loading..."]

    async def test_missing_access(self, discord_chat, fake_bot):
        fake_bot.get_partial_messageable(10).error = http_error(discord.Forbidden, 403, "Forbidden")

        with pytest.raises(ChatPlatformError) as exc_info:
            await discord_chat.create_message(10, "Loading...")

        assert exc_info.value.operation == "create_message"


class TestEditMessage:

    async def test_replaces_body(self, discord_chat, fake_bot):
        embed = discord.Embed(title="board")

        await discord_chat.edit_message(10, 20, content=None, embed=embed)

        assert fake_bot.channels[10].edits == [(20, {"content": None, "embed": embed})]

    async def test_deleted_message_is_a_publish_error(self, discord_chat, fake_bot):
        fake_bot.get_partial_messageable(10).error = http_error(discord.NotFound, 404, "Not Found")

        with pytest.raises(ScoreboardPublishError) as exc_info:
            await discord_chat.edit_message(10, 20, content=None)

        assert (exc_info.value.channel_id, exc_info.value.message_id) == (10, 20)

    async def test_other_http_errors(self, discord_chat, fake_bot):
        fake_bot.get_partial_messageable(10).error = http_error(discord.Forbidden, 403, "Forbidden")

        with pytest.raises(ChatPlatformError) as exc_info:
            await discord_chat.edit_message(10, 20, content="x")

        assert not isinstance(exc_info.value, ScoreboardPublishError)


class TestDeleteMessage:

    async def test_deletes(self, discord_chat, fake_bot):
        await discord_chat.delete_message(10, 30)

        assert fake_bot.channels[10].deleted == [30]

    async def test_already_deleted_is_ignored(self, discord_chat, fake_bot):
        fake_bot.get_partial_messageable(10).error = http_error(discord.NotFound, 404, "Not Found")

        await discord_chat.delete_message(10, 30)

    async def test_missing_permissions(self, discord_chat, fake_bot):
        fake_bot.get_partial_messageable(10).error = http_error(discord.Forbidden, 403, "Forbidden")

        with pytest.raises(ChatPlatformError):
            await discord_chat.delete_message(10, 30)
