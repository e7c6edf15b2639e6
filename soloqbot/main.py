import asyncio
from typing import Optional

import discord
from discord import app_commands
from discord.ext import commands

from soloqbot.config import Config
from soloqbot.constants import LeaderboardConstants
from soloqbot.services.chat import DiscordChatClient
from soloqbot.services.leaderboard import LeaderboardService
from soloqbot.services.rate_limiter import SimpleRateLimiter
from soloqbot.services.registration import RegistrationService
from soloqbot.services.registry_store import RegistryStore
from soloqbot.services.riot_client import RiotApiClient
from soloqbot.services.scoreboard_state import ScoreboardState
from soloqbot.utils.logger import setup_logger
from soloqbot.utils.redis_utils import RedisUtils


class SoloQBot(commands.Bot):
    def __init__(self, config: Config):
        # Guild messages only; deleting chatter needs no message content
        intents = discord.Intents.none()
        intents.guilds = True
        intents.guild_messages = True

        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            help_command=None,
            activity=discord.Activity(type=discord.ActivityType.watching, name=LeaderboardConstants.PRESENCE_TEXT)
        )

        # Attach app command error handler
        self.tree.on_error = self.on_app_command_error

        self.config = config
        self.logger = setup_logger('soloqbot', config.debug)
        self.rate_limiter = SimpleRateLimiter()
        self.redis = None
        self.store: Optional[RegistryStore] = None
        self.riot_client: Optional[RiotApiClient] = None
        self.chat = DiscordChatClient(self)
        self.scoreboard_state: Optional[ScoreboardState] = None
        self.leaderboard_service: Optional[LeaderboardService] = None
        self.registration_service: Optional[RegistrationService] = None

    async def setup_hook(self):
        """Called when the bot is starting up"""
        self.logger.info("Setting up SoloQ leaderboard bot...")

        # Initialize store and restore the scoreboard location
        self.redis = await RedisUtils.create_redis_client(self.config)
        self.store = RegistryStore(self.redis)
        self.scoreboard_state = ScoreboardState(self.store, self.chat)
        await self.scoreboard_state.load()

        self.riot_client = RiotApiClient(self.config)
        self.registration_service = RegistrationService(self.store, self.riot_client)
        self.leaderboard_service = LeaderboardService(
            self.config, self.store, self.scoreboard_state, self.riot_client, self.chat
        )

        await self.load_extension('soloqbot.cogs.leaderboard')
        self.logger.info("Loaded cog: soloqbot.cogs.leaderboard")

        await self._sync_commands()

        self.logger.info("SoloQ leaderboard bot setup complete!")

    async def _sync_commands(self):
        """Sync slash commands with Discord"""
        if not self.tree.get_commands():
            self.logger.warning("No application commands found to sync. Check for cog loading errors.")
            return

        guild_ids = self.config.get_guild_ids()
        if guild_ids:
            # Guild-specific sync (instant updates, works in specified servers)
            for guild_id in guild_ids:
                guild = discord.Object(id=guild_id)
                try:
                    self.tree.copy_global_to(guild=guild)
                    synced = await self.tree.sync(guild=guild)
                    self.logger.info(f"Successfully synced {len(synced)} command(s) to guild {guild_id}")
                except discord.errors.Forbidden:
                    self.logger.error(f"Permission error syncing to guild {guild_id}. Ensure the bot has the 'application.commands' scope and is in the guild.", exc_info=True)
                except discord.errors.HTTPException as e:
                    self.logger.error(f"HTTP error syncing to guild {guild_id}. Status: {e.status}, Response: {e.text}", exc_info=True)
        else:
            # Global sync (can take up to 1 hour, works everywhere)
            self.logger.info("Attempting to sync commands globally... (Note: This can take up to an hour to propagate)")
            try:
                synced = await self.tree.sync()
            except discord.errors.HTTPException as e:
                self.logger.error(f"Failed to sync commands: {e}", exc_info=True)
                return
            self.logger.info(f"Successfully synced {len(synced)} command(s) globally")
            for cmd in synced:
                self.logger.info(f"  - {cmd.name}: {cmd.description}")

    async def on_ready(self):
        """Called when the bot is ready"""
        self.logger.info(f'{self.user} has connected to Discord!')
        self.logger.info(f'Bot is in {len(self.guilds)} guilds')

    async def on_app_command_error(self, interaction: discord.Interaction, error: app_commands.AppCommandError):
        """Global error handler for slash commands"""
        command_name = interaction.command.name if interaction.command else 'Unknown'

        # Don't log full traceback for permission errors
        if isinstance(error, app_commands.CheckFailure):
            self.logger.info(f"Permission denied for command '{command_name}' by user {interaction.user}")
        else:
            self.logger.error(f"Error in app command '{command_name}': {error}", exc_info=error)

        if isinstance(error, app_commands.CommandOnCooldown):
            error_message = f"❌ Command is on cooldown. Try again in {error.retry_after:.2f} seconds."
        elif isinstance(error, app_commands.MissingPermissions):
            error_message = "❌ You don't have permission to use this command."
        elif isinstance(error, app_commands.BotMissingPermissions):
            error_message = "❌ I don't have the required permissions to execute this command."
        elif isinstance(error, app_commands.NoPrivateMessage):
            error_message = "❌ This command can only be used in a server."
        elif isinstance(error, app_commands.CheckFailure):
            error_message = "❌ You don't have the required permissions to use this command."
        else:
            error_message = "❌ An unexpected error occurred while processing your command."

        embed = discord.Embed(title=error_message, color=discord.Color.red())
        try:
            if interaction.response.is_done():
                await interaction.followup.send(embed=embed, ephemeral=True)
            else:
                await interaction.response.send_message(embed=embed, ephemeral=True)
        except discord.HTTPException as e:
            self.logger.error(f"Failed to send error response: {e}")

    async def close(self):
        """Cleanup when bot is shutting down"""
        self.logger.info("Shutting down SoloQ leaderboard bot...")

        if self.riot_client:
            await self.riot_client.close()
        if self.redis:
            await self.redis.aclose()

        await super().close()


async def main():
    """Main entry point"""
    config = Config.from_env()
    config.validate()

    bot = SoloQBot(config)

    try:
        await bot.start(config.discord_token)
    except KeyboardInterrupt:
        pass
    except Exception as e:
        bot.logger.critical(f"Fatal error: {e}", exc_info=True)
        raise
    finally:
        await bot.close()


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
