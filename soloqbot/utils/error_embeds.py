"""
Centralized error embeds for consistent error handling across the bot.

Provides standardized error messages and formatting for command replies.
"""

import discord

from soloqbot.utils.exceptions import SoloQBotException


class ErrorEmbeds:
    """Centralized error embed factory for consistent error handling."""

    @staticmethod
    def from_exception(error: SoloQBotException) -> discord.Embed:
        """Create embed from a bot exception's user-facing message."""
        return discord.Embed(
            description=error.user_message,
            color=discord.Color.red()
        )

    @staticmethod
    def scoreboard_not_configured() -> discord.Embed:
        """Create embed for when no scoreboard channel has been set up."""
        return discord.Embed(
            title="Scoreboard Not Configured",
            description="No leaderboard channel is set. An administrator can run `/leaderboard` in the channel to use.",
            color=discord.Color.orange()
        )
