"""
Scoreboard data models.

Provides immutable data transfer objects for the leaderboard location and the
outcome of a refresh.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ScoreboardLocation:
    """Where the live leaderboard message lives."""
    channel_id: Optional[int] = None
    message_id: Optional[int] = None

    @property
    def is_armed(self) -> bool:
        return self.channel_id is not None and self.message_id is not None


@dataclass(frozen=True)
class RefreshResult:
    """Outcome of one refresh cycle."""
    published: bool
    identities: int = 0
    displayed: int = 0
    failures: int = 0
    trigger: str = "scheduled"
