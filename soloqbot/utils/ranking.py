"""
Shared ranking utilities for the solo queue leaderboard.

Best first: higher tier, then higher division, then more league points.
"""

from functools import cmp_to_key
from typing import Iterable, List

from soloqbot.constants import RiotConstants
from soloqbot.data_models.ranked import RankedEntry


class RankingUtility:
    """Ordering and eligibility rules for ranked entries."""

    @staticmethod
    def compare_entries(a: RankedEntry, b: RankedEntry) -> int:
        """
        Compare two ranked entries, best first.

        Returns a negative number when ``a`` ranks above ``b``, positive when
        below and 0 when they are tied on tier, division and points.

        Raises:
            ValueError: If either entry is missing a tier or division
        """
        for entry in (a, b):
            if entry.tier is None or entry.division is None:
                raise ValueError(f"Cannot rank {entry.identity_name!r} without tier and division")

        if a.tier != b.tier:
            return b.tier - a.tier
        if a.division != b.division:
            return b.division - a.division
        return b.points - a.points

    @staticmethod
    def is_displayable(entry: RankedEntry, queue_type: str = RiotConstants.RANKED_SOLO_QUEUE) -> bool:
        """Check whether an entry belongs on the leaderboard."""
        return entry.queue_type == queue_type and entry.is_ranked

    @staticmethod
    def filter_displayable(entries: Iterable[RankedEntry],
                           queue_type: str = RiotConstants.RANKED_SOLO_QUEUE) -> List[RankedEntry]:
        return [entry for entry in entries if RankingUtility.is_displayable(entry, queue_type)]

    @staticmethod
    def sort_entries(entries: Iterable[RankedEntry]) -> List[RankedEntry]:
        """Sort entries best first. Stable, so tied entries keep their input order."""
        return sorted(entries, key=cmp_to_key(RankingUtility.compare_entries))
