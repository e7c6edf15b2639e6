"""
Leaderboard Cog - Scoreboard Commands & Background Refresh

Registers summoners, moves the scoreboard to a channel, keeps that channel
free of chatter and refreshes the scoreboard on a fixed interval.
"""

import logging

import discord
from discord import app_commands
from discord.ext import commands, tasks

from soloqbot.constants import RegistrationConstants
from soloqbot.services.rate_limiter import rate_limit
from soloqbot.utils.error_embeds import ErrorEmbeds
from soloqbot.utils.exceptions import (
    ChatPlatformError,
    InvalidSummonerNameError,
    SoloQBotException,
    SummonerNotFoundError,
)

logger = logging.getLogger(__name__)


class LeaderboardCog(commands.Cog):
    """Scoreboard commands, channel moderation and the refresh loop"""

    def __init__(self, bot):
        self.bot = bot
        self.leaderboard_service = bot.leaderboard_service
        self.registration_service = bot.registration_service
        self.scoreboard_state = bot.scoreboard_state
        self.chat = bot.chat
        self.refresh_scoreboard.change_interval(hours=bot.config.refresh_interval_hours)

    async def cog_load(self):
        self.refresh_scoreboard.start()
        logger.info("LeaderboardCog: refresh task started")

    async def cog_unload(self):
        """Stop background tasks when cog is unloaded"""
        self.refresh_scoreboard.cancel()
        logger.info("LeaderboardCog: refresh task stopped")

    @tasks.loop(hours=24)
    async def refresh_scoreboard(self):
        """Background task that rewrites the scoreboard message"""
        try:
            await self.leaderboard_service.refresh("scheduled")
        except Exception as e:
            # Keep the loop alive; the next tick retries against the same location
            logger.error(f"Error in scheduled scoreboard refresh: {e}", exc_info=True)

    @refresh_scoreboard.before_loop
    async def before_refresh_scoreboard(self):
        """Wait for bot to be ready before starting the refresh task"""
        await self.bot.wait_until_ready()

    @app_commands.command(name="register", description="Register a league account to track")
    @app_commands.describe(username="The summoner name to track. Only works for NA atm")
    @app_commands.guild_only()
    @rate_limit("register", limit=RegistrationConstants.RATE_LIMIT, window=RegistrationConstants.RATE_WINDOW)
    async def register(
        self,
        interaction: discord.Interaction,
        username: app_commands.Range[str, RegistrationConstants.MIN_NAME_LENGTH, RegistrationConstants.MAX_NAME_LENGTH]
    ):
        """Register a summoner for the leaderboard."""
        await interaction.response.defer(ephemeral=True)

        try:
            result = await self.registration_service.register(username)
        except (InvalidSummonerNameError, SummonerNotFoundError) as e:
            await interaction.followup.send(e.user_message, ephemeral=True)
            return
        except SoloQBotException as e:
            logger.error(f"Error in register command for {username!r}: {e}", exc_info=True)
            await interaction.followup.send(embed=ErrorEmbeds.from_exception(e), ephemeral=True)
            return

        if result.inserted:
            content = "Account Registered. It will be included on next refresh."
        else:
            content = "Account is already registered."
        await interaction.followup.send(content, ephemeral=True)

    @app_commands.command(name="leaderboard", description="Make the current channel the scoreboard channel")
    @app_commands.guild_only()
    @app_commands.default_permissions(administrator=True)
    async def leaderboard(self, interaction: discord.Interaction):
        """Create a new scoreboard message in this channel and publish it."""
        await interaction.response.defer(ephemeral=True, thinking=True)

        channel_id = interaction.channel_id
        if channel_id is None:
            await interaction.edit_original_response(content="❌ This command must be used in a channel.")
            return

        try:
            await self.leaderboard_service.activate(channel_id)
        except SoloQBotException as e:
            logger.error(f"Error launching scoreboard in channel {channel_id}: {e}", exc_info=True)
            await interaction.edit_original_response(content=e.user_message)
            return

        logger.info(f"Scoreboard launched in channel {channel_id} by {interaction.user.id} ({interaction.user.name})")
        await interaction.edit_original_response(content="Launched the scoreboard")

    @app_commands.command(name="scoreboard-refresh", description="Refresh the scoreboard now")
    @app_commands.guild_only()
    @app_commands.default_permissions(administrator=True)
    async def scoreboard_refresh(self, interaction: discord.Interaction):
        """Run one refresh cycle on demand."""
        await interaction.response.defer(ephemeral=True, thinking=True)

        if not await self.scoreboard_state.is_armed():
            await interaction.followup.send(embed=ErrorEmbeds.scoreboard_not_configured(), ephemeral=True)
            return

        try:
            result = await self.leaderboard_service.refresh("manual")
        except SoloQBotException as e:
            logger.error(f"Manual scoreboard refresh failed: {e}", exc_info=True)
            await interaction.followup.send(embed=ErrorEmbeds.from_exception(e), ephemeral=True)
            return

        if result.published:
            content = (
                f"✅ Scoreboard refreshed: {result.displayed} shown from "
                f"{result.identities} registered ({result.failures} lookups failed)."
            )
        elif result.failures:
            content = f"⚠️ Scoreboard not updated: all {result.failures} lookups failed."
        elif await self.scoreboard_state.is_armed():
            content = "⚠️ Scoreboard not updated: no summoners are registered yet. Use `/register`."
        else:
            await interaction.followup.send(embed=ErrorEmbeds.scoreboard_not_configured(), ephemeral=True)
            return
        await interaction.followup.send(content, ephemeral=True)

    @commands.Cog.listener()
    async def on_message(self, message: discord.Message):
        """Delete anything non-bots post in the scoreboard channel"""
        if message.author.bot:
            return
        if not await self.scoreboard_state.is_scoreboard_channel(message.channel.id):
            return

        try:
            await self.chat.delete_message(message.channel.id, message.id)
        except ChatPlatformError as e:
            logger.warning(f"Could not delete message {message.id} in scoreboard channel: {e}")


async def setup(bot):
    await bot.add_cog(LeaderboardCog(bot))
