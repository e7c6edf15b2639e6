"""
Riot Games API client.

Resolves Riot IDs to PUUIDs and fetches league entries. Requests share one
aiohttp session and are spaced by a sliding-window limiter so a full refresh
stays within the API key's budget.
"""

import asyncio
import logging
from typing import Any, List, Optional
from urllib.parse import quote

import aiohttp

from soloqbot.config import Config
from soloqbot.constants import RiotConstants
from soloqbot.data_models.ranked import RankedEntry
from soloqbot.services.rate_limiter import SimpleRateLimiter
from soloqbot.utils.exceptions import RankingProviderError

logger = logging.getLogger(__name__)

RATE_LIMIT_KEY = "riot_api"


class RiotApiClient:
    """Thin async client for the account-v1 and league-v4 endpoints."""

    def __init__(self, config: Config, rate_limiter: Optional[SimpleRateLimiter] = None,
                 session: Optional[aiohttp.ClientSession] = None):
        self.config = config
        self.rate_limiter = rate_limiter or SimpleRateLimiter()
        self._session = session

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={RiotConstants.TOKEN_HEADER: self.config.riot_api_key or ""},
                timeout=aiohttp.ClientTimeout(total=RiotConstants.REQUEST_TIMEOUT)
            )
        return self._session

    async def close(self):
        if self._session is not None and not self._session.closed:
            await self._session.close()

    async def _get_json(self, url: str, operation: str, allow_not_found: bool = False) -> Optional[Any]:
        """
        GET a Riot endpoint and decode the JSON body.

        Returns None for a 404 when ``allow_not_found`` is set. A 429 is
        retried once after Retry-After.

        Raises:
            RankingProviderError: On any other non-200 status, a transport error,
                a timeout or a body that is not JSON
        """
        session = await self._get_session()

        for attempt in range(2):
            await self.rate_limiter.acquire(
                RATE_LIMIT_KEY, self.config.riot_rate_limit, self.config.riot_rate_window
            )
            try:
                async with session.get(url) as resp:
                    if resp.status == 429 and attempt == 0:
                        retry_after = self._retry_after(resp.headers.get("Retry-After"))
                        logger.warning(f"Riot API rate limited during {operation}, retrying in {retry_after}s")
                        await asyncio.sleep(retry_after)
                        continue
                    if resp.status == 404 and allow_not_found:
                        return None
                    if resp.status != 200:
                        text = await resp.text()
                        raise RankingProviderError(operation, resp.status, text[:200])
                    return await resp.json()
            except aiohttp.ClientError as e:
                raise RankingProviderError(operation, None, str(e)) from e
            except asyncio.TimeoutError as e:
                raise RankingProviderError(operation, None, "timeout") from e
            except ValueError as e:
                # Undecodable JSON body
                raise RankingProviderError(operation, 200, f"malformed response: {e}") from e

        raise RankingProviderError(operation, 429, "rate limited after retry")

    @staticmethod
    def _retry_after(header: Optional[str]) -> float:
        try:
            return max(float(header), 0.0) if header else RiotConstants.DEFAULT_RETRY_AFTER
        except ValueError:
            return RiotConstants.DEFAULT_RETRY_AFTER

    async def resolve_identity(self, name: str) -> Optional[str]:
        """
        Resolve a Riot ID to a PUUID.

        Args:
            name: ``GameName#TAG``; a bare name uses the configured default tag line

        Returns:
            The PUUID, or None if Riot does not know the account
        """
        game_name, _, tag_line = name.strip().partition('#')
        tag_line = tag_line.strip() or self.config.riot_default_tag_line
        url = (
            f"https://{self.config.riot_region}.api.riotgames.com"
            f"/riot/account/v1/accounts/by-riot-id/{quote(game_name.strip(), safe='')}/{quote(tag_line, safe='')}"
        )
        payload = await self._get_json(url, "resolve_identity", allow_not_found=True)
        if not payload:
            return None
        return payload.get("puuid")

    async def get_ranked_entries(self, provider_id: str, fallback_name: str = "") -> List[RankedEntry]:
        """Fetch every league entry (all queues) for one PUUID."""
        url = (
            f"https://{self.config.riot_platform}.api.riotgames.com"
            f"/lol/league/v4/entries/by-puuid/{quote(provider_id, safe='')}"
        )
        payload = await self._get_json(url, "get_ranked_entries", allow_not_found=True)
        if not isinstance(payload, list):
            return []
        try:
            return [RankedEntry.from_league_entry(item, provider_id, fallback_name) for item in payload]
        except (AttributeError, TypeError, ValueError) as e:
            raise RankingProviderError("get_ranked_entries", 200, f"malformed league entry: {e}") from e
