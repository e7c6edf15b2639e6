"""
Leaderboard service: the refresh cycle behind the scoreboard message.

One cycle lists the registered summoners, looks each one up on Riot, keeps the
ranked solo queue entries, sorts them and rewrites the scoreboard message.

Cycles are single-flight. Scheduled ticks, activations and manual refreshes
all run under one lock; a trigger that arrives mid-cycle waits for the cycle
in flight and then runs its own, so an activation always publishes to the
message it just created.

Per-summoner lookups are bounded by ``Config.lookup_timeout``. A failed or
timed out lookup skips that summoner and the cycle carries on; the failure
count is logged. When every lookup fails the previous leaderboard is left
untouched instead of being replaced with an empty one.
"""

import asyncio
import logging
from typing import Dict, Iterable, List, Tuple

from soloqbot.config import Config
from soloqbot.data_models.ranked import RankedEntry
from soloqbot.data_models.scoreboard import RefreshResult
from soloqbot.services.registry_store import RegistryStore
from soloqbot.services.scoreboard_state import ScoreboardState
from soloqbot.utils.embeds import build_leaderboard_embed
from soloqbot.utils.exceptions import RankingProviderError
from soloqbot.utils.ranking import RankingUtility

logger = logging.getLogger(__name__)


class LeaderboardService:
    """Runs refresh cycles and activations for the scoreboard."""

    def __init__(self, config: Config, store: RegistryStore, state: ScoreboardState, provider, chat):
        """
        Args:
            config: Bot configuration
            store: Registry of summoners
            state: Shared scoreboard location
            provider: Ranking provider with ``get_ranked_entries(provider_id, fallback_name)``
            chat: Outbound chat client with ``edit_message``
        """
        self.config = config
        self.store = store
        self.state = state
        self.provider = provider
        self.chat = chat
        self._refresh_lock = asyncio.Lock()

    @property
    def is_refreshing(self) -> bool:
        return self._refresh_lock.locked()

    async def refresh(self, trigger: str = "scheduled") -> RefreshResult:
        """Run one refresh cycle, waiting for any cycle already in flight."""
        if self._refresh_lock.locked():
            logger.info(f"Refresh ({trigger}) queued behind the cycle in flight")
        async with self._refresh_lock:
            return await self._run_cycle(trigger)

    async def activate(self, channel_id: int) -> RefreshResult:
        """
        Move the scoreboard to ``channel_id`` and publish it right away.

        Arming and the first refresh happen under the refresh lock, so two
        activations never interleave and a scheduled tick never publishes
        half way through an activation.
        """
        async with self._refresh_lock:
            await self.state.arm(channel_id)
            return await self._run_cycle("activation")

    async def _run_cycle(self, trigger: str) -> RefreshResult:
        location = await self.state.read()
        if not location.is_armed:
            logger.debug(f"Refresh ({trigger}) skipped: scoreboard is not armed")
            return RefreshResult(published=False, trigger=trigger)

        # Fetching
        identities = sorted(await self.store.list_identities())
        if not identities:
            logger.info(f"Refresh ({trigger}) skipped: no summoners registered")
            return RefreshResult(published=False, trigger=trigger)

        names = await self.store.display_names(identities)
        entries, failures = await self._fetch_entries(identities, names)

        if failures:
            logger.warning(f"Refresh ({trigger}): {failures}/{len(identities)} lookups failed")
        if failures == len(identities):
            logger.error(f"Refresh ({trigger}) aborted: every lookup failed, keeping previous leaderboard")
            return RefreshResult(published=False, identities=len(identities), failures=failures, trigger=trigger)

        # Ranking
        ranked = RankingUtility.sort_entries(RankingUtility.filter_displayable(entries))

        # Publishing
        embed = build_leaderboard_embed(ranked, self.config.leaderboard_title, self.config.leaderboard_size)
        await self.chat.edit_message(location.channel_id, location.message_id, content=None, embed=embed)

        result = RefreshResult(
            published=True,
            identities=len(identities),
            displayed=embed.description.count("\n"),
            failures=failures,
            trigger=trigger
        )
        logger.info(
            f"Leaderboard refreshed ({trigger}): {result.displayed} shown, "
            f"{len(ranked)} ranked, {result.identities} registered, {result.failures} failed"
        )
        return result

    async def _fetch_entries(self, identities: Iterable[str],
                             names: Dict[str, str]) -> Tuple[List[RankedEntry], int]:
        entries: List[RankedEntry] = []
        failures = 0

        for provider_id in identities:
            try:
                found = await asyncio.wait_for(
                    self.provider.get_ranked_entries(provider_id, names.get(provider_id, "")),
                    timeout=self.config.lookup_timeout
                )
            except asyncio.TimeoutError:
                failures += 1
                logger.warning(f"Lookup for {provider_id} timed out after {self.config.lookup_timeout}s")
                continue
            except RankingProviderError as e:
                failures += 1
                logger.warning(f"Lookup for {provider_id} failed: {e}")
                continue

            for entry in found:
                if entry.is_veteran and RankingUtility.is_displayable(entry):
                    logger.info(f"{entry.identity_name} is a veteran")
            entries.extend(found)

        return entries, failures
