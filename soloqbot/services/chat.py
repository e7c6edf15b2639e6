"""
Outbound Discord operations used by the leaderboard.

Works on raw channel and message ids through partial objects so the
scoreboard does not depend on the message cache.
"""

import logging
from typing import Optional

import discord

from soloqbot.utils.exceptions import ChatPlatformError, ScoreboardPublishError

logger = logging.getLogger(__name__)


class DiscordChatClient:
    """Create, edit and delete messages by id."""

    def __init__(self, bot: discord.Client):
        self.bot = bot

    async def create_message(self, channel_id: int, content: str) -> int:
        channel = self.bot.get_partial_messageable(channel_id)
        try:
            message = await channel.send(content)
        except discord.HTTPException as e:
            raise ChatPlatformError("create_message", str(e)) from e
        return message.id

    async def edit_message(self, channel_id: int, message_id: int, *,
                           content: Optional[str] = None, embed: Optional[discord.Embed] = None):
        """Replace the message body. ``content=None`` clears the text."""
        message = self.bot.get_partial_messageable(channel_id).get_partial_message(message_id)
        try:
            await message.edit(content=content, embed=embed)
        except discord.NotFound as e:
            raise ScoreboardPublishError(channel_id, message_id) from e
        except discord.HTTPException as e:
            raise ChatPlatformError("edit_message", str(e)) from e

    async def delete_message(self, channel_id: int, message_id: int):
        message = self.bot.get_partial_messageable(channel_id).get_partial_message(message_id)
        try:
            await message.delete()
        except discord.NotFound:
            logger.debug(f"Message {message_id} already deleted")
        except discord.HTTPException as e:
            raise ChatPlatformError("delete_message", str(e)) from e
