"""
Scoreboard location state.

The single piece of shared mutable state in the bot: which channel and message
hold the live leaderboard. Every read and write goes through one lock and the
location itself is an immutable snapshot, so no caller ever sees a channel
from one activation paired with a message from another.
"""

import asyncio
import logging

from soloqbot.constants import LeaderboardConstants
from soloqbot.data_models.scoreboard import ScoreboardLocation
from soloqbot.services.registry_store import RegistryStore

logger = logging.getLogger(__name__)


class ScoreboardState:
    """Owns the scoreboard location and serializes access to it."""

    def __init__(self, store: RegistryStore, chat):
        """
        Args:
            store: Registry store used to persist the location
            chat: Outbound chat client with ``create_message(channel_id, content)``
        """
        self.store = store
        self.chat = chat
        self._location = ScoreboardLocation()
        self._lock = asyncio.Lock()

    async def load(self) -> ScoreboardLocation:
        """Restore the persisted location. A fresh deployment starts disarmed."""
        async with self._lock:
            self._location = await self.store.get_scoreboard_location()
            location = self._location

        if location.is_armed:
            logger.info(f"Scoreboard restored: channel={location.channel_id} message={location.message_id}")
        else:
            logger.info("No scoreboard configured yet, waiting for /leaderboard")
        return location

    async def read(self) -> ScoreboardLocation:
        async with self._lock:
            return self._location

    async def is_armed(self) -> bool:
        return (await self.read()).is_armed

    async def is_scoreboard_channel(self, channel_id: int) -> bool:
        location = await self.read()
        return location.channel_id is not None and location.channel_id == channel_id

    async def arm(self, channel_id: int) -> int:
        """
        Create a new leaderboard message in ``channel_id`` and make it current.

        The in-memory location changes only after the message exists and both
        ids are persisted; a failure leaves the previous location in place.

        Returns:
            The id of the new leaderboard message
        """
        async with self._lock:
            message_id = await self.chat.create_message(channel_id, LeaderboardConstants.LOADING_CONTENT)
            await self.store.set_scoreboard_location(channel_id, message_id)
            self._location = ScoreboardLocation(channel_id=channel_id, message_id=message_id)

        logger.info(f"Scoreboard armed: channel={channel_id} message={message_id}")
        return message_id
