"""
Registry store for registered summoners and the scoreboard location.

Key layout (kept compatible with existing deployments):
- ``scoreboard_channel`` / ``scoreboard_message``: the leaderboard location
- every other key: a registered summoner, keyed by Riot PUUID, whose value is
  the name entered at registration
"""

import logging
from typing import Dict, Iterable, Optional, Set

from soloqbot.constants import StoreKeys
from soloqbot.data_models.scoreboard import ScoreboardLocation
from soloqbot.services.base import BaseService

logger = logging.getLogger(__name__)


class RegistryStore(BaseService):
    """Semantic wrapper over the Redis key space."""

    async def list_identities(self) -> Set[str]:
        """Enumerate every registered provider id. Reserved keys are excluded."""
        async def _scan():
            identities = set()
            async for key in self.redis.scan_iter(count=500):
                if key not in StoreKeys.RESERVED:
                    identities.add(key)
            return identities

        return await self.execute_with_retry(_scan, "list_identities")

    async def display_names(self, provider_ids: Iterable[str]) -> Dict[str, str]:
        """Fetch the names stored at registration for the given provider ids."""
        ids = list(provider_ids)
        if not ids:
            return {}

        values = await self.execute_with_retry(lambda: self.redis.mget(ids), "display_names")
        return {
            provider_id: value
            for provider_id, value in zip(ids, values)
            if value and value != StoreKeys.LEGACY_VALUE
        }

    async def register(self, provider_id: str, display_name: str) -> bool:
        """
        Register a summoner if it is not registered yet.

        Returns:
            True if a new record was inserted, False if it already existed
        """
        if not provider_id or provider_id in StoreKeys.RESERVED:
            raise ValueError(f"Invalid provider id: {provider_id!r}")

        inserted = await self.execute_with_retry(
            lambda: self.redis.set(provider_id, display_name or StoreKeys.LEGACY_VALUE, nx=True),
            "register"
        )
        return bool(inserted)

    async def get_scoreboard_location(self) -> ScoreboardLocation:
        channel_raw, message_raw = await self.execute_with_retry(
            lambda: self.redis.mget([StoreKeys.SCOREBOARD_CHANNEL, StoreKeys.SCOREBOARD_MESSAGE]),
            "get_scoreboard_location"
        )
        return ScoreboardLocation(
            channel_id=self._parse_id(StoreKeys.SCOREBOARD_CHANNEL, channel_raw),
            message_id=self._parse_id(StoreKeys.SCOREBOARD_MESSAGE, message_raw),
        )

    async def set_scoreboard_channel(self, channel_id: int):
        await self.execute_with_retry(
            lambda: self.redis.set(StoreKeys.SCOREBOARD_CHANNEL, str(channel_id)),
            "set_scoreboard_channel"
        )

    async def set_scoreboard_message(self, message_id: int):
        await self.execute_with_retry(
            lambda: self.redis.set(StoreKeys.SCOREBOARD_MESSAGE, str(message_id)),
            "set_scoreboard_message"
        )

    async def set_scoreboard_location(self, channel_id: int, message_id: int):
        """Persist both ids in a single write."""
        await self.execute_with_retry(
            lambda: self.redis.mset({
                StoreKeys.SCOREBOARD_CHANNEL: str(channel_id),
                StoreKeys.SCOREBOARD_MESSAGE: str(message_id),
            }),
            "set_scoreboard_location"
        )

    @staticmethod
    def _parse_id(key: str, raw: Optional[str]) -> Optional[int]:
        if raw is None:
            return None
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring malformed value for {key}: {raw!r}")
            return None
