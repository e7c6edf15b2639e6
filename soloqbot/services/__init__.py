"""
Services package for the SoloQ leaderboard bot.

Store access, Riot lookups, the scoreboard location and the refresh cycle.
"""

from .base import BaseService
from .leaderboard import LeaderboardService
from .rate_limiter import SimpleRateLimiter
from .registration import RegistrationService
from .registry_store import RegistryStore
from .scoreboard_state import ScoreboardState

__all__ = [
    'BaseService',
    'LeaderboardService',
    'RegistrationService',
    'RegistryStore',
    'ScoreboardState',
    'SimpleRateLimiter',
]
