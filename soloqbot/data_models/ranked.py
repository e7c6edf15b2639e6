"""
Ranked data models for the solo queue leaderboard.

Provides immutable snapshots of one summoner's standing, built fresh from the
Riot league endpoint on every refresh.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Optional


class Tier(IntEnum):
    """Competitive tiers, ordered lowest to highest."""
    UNRANKED = 0
    IRON = 1
    BRONZE = 2
    SILVER = 3
    GOLD = 4
    PLATINUM = 5
    EMERALD = 6
    DIAMOND = 7
    MASTER = 8
    GRANDMASTER = 9
    CHALLENGER = 10

    @property
    def is_ranked(self) -> bool:
        return self is not Tier.UNRANKED

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional['Tier']:
        if not value:
            return None
        try:
            return cls[value.strip().upper()]
        except KeyError:
            return None


class Division(IntEnum):
    """Divisions within a tier, ordered lowest to highest."""
    IV = 1
    III = 2
    II = 3
    I = 4

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional['Division']:
        if not value:
            return None
        try:
            return cls[value.strip().upper()]
        except KeyError:
            return None


@dataclass(frozen=True)
class RankedEntry:
    """One summoner's standing in a single ranked queue."""
    identity_name: str
    tier: Optional[Tier]
    division: Optional[Division]
    points: int = 0
    wins: int = 0
    losses: int = 0
    is_veteran: bool = False
    has_hot_streak: bool = False
    queue_type: str = ""
    provider_id: str = ""

    @property
    def is_ranked(self) -> bool:
        """Only ranked entries with a division are eligible for display."""
        return self.tier is not None and self.tier.is_ranked and self.division is not None

    @classmethod
    def from_league_entry(cls, payload: Dict[str, Any], provider_id: str = "", fallback_name: str = "") -> 'RankedEntry':
        """
        Build an entry from one league-v4 JSON object.

        Args:
            payload: Raw league entry from Riot
            provider_id: PUUID the lookup was made for
            fallback_name: Name stored at registration, used when Riot omits one
        """
        name = payload.get("summonerName") or payload.get("riotId") or fallback_name or provider_id
        return cls(
            identity_name=name,
            tier=Tier.parse(payload.get("tier")),
            division=Division.parse(payload.get("rank")),
            points=int(payload.get("leaguePoints") or 0),
            wins=max(0, int(payload.get("wins") or 0)),
            losses=max(0, int(payload.get("losses") or 0)),
            is_veteran=bool(payload.get("veteran", False)),
            has_hot_streak=bool(payload.get("hotStreak", False)),
            queue_type=payload.get("queueType", ""),
            provider_id=payload.get("puuid") or provider_id,
        )
