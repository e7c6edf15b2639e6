import os
from dataclasses import dataclass
from typing import List, Optional

from dotenv import load_dotenv

load_dotenv()


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass(frozen=True)
class Config:
    """Bot configuration settings, read once at startup"""

    # Discord settings
    discord_token: Optional[str] = None
    discord_guild_ids: str = ''  # Comma-separated, empty for global command sync

    # Riot API settings
    riot_api_key: Optional[str] = None
    riot_platform: str = 'na1'
    riot_region: str = 'americas'
    riot_default_tag_line: str = 'NA1'
    riot_rate_limit: int = 20
    riot_rate_window: float = 1.0

    # Redis settings
    redis_url: Optional[str] = None
    redis_hostname: Optional[str] = None
    redis_port: int = 6379
    redis_password: Optional[str] = None

    # Leaderboard settings
    refresh_interval_hours: float = 24.0
    leaderboard_size: int = 10
    leaderboard_title: str = 'OME SoloQ Leaderboard'
    lookup_timeout: float = 10.0

    debug: bool = False

    @classmethod
    def from_env(cls) -> 'Config':
        """Build the configuration from environment variables (and .env)"""
        return cls(
            discord_token=os.getenv('DISCORD_TOKEN'),
            discord_guild_ids=os.getenv('DISCORD_GUILD_IDS', ''),
            riot_api_key=os.getenv('RIOT_API_KEY'),
            riot_platform=os.getenv('RIOT_PLATFORM', 'na1').lower(),
            riot_region=os.getenv('RIOT_REGION', 'americas').lower(),
            riot_default_tag_line=os.getenv('RIOT_DEFAULT_TAG_LINE', 'NA1'),
            riot_rate_limit=_env_int('RIOT_RATE_LIMIT', 20),
            riot_rate_window=_env_float('RIOT_RATE_WINDOW', 1.0),
            redis_url=os.getenv('REDIS_URL'),
            redis_hostname=os.getenv('REDIS_HOSTNAME'),
            redis_port=_env_int('REDIS_PORT', 6379),
            redis_password=os.getenv('REDIS_PASSWORD'),
            refresh_interval_hours=_env_float('REFRESH_INTERVAL_HOURS', 24.0),
            leaderboard_size=_env_int('LEADERBOARD_SIZE', 10),
            leaderboard_title=os.getenv('LEADERBOARD_TITLE', 'OME SoloQ Leaderboard'),
            lookup_timeout=_env_float('LOOKUP_TIMEOUT', 10.0),
            debug=os.getenv('DEBUG', 'False').lower() == 'true',
        )

    def get_guild_ids(self) -> List[int]:
        """Get list of guild IDs for command syncing"""
        if not self.discord_guild_ids:
            # Global sync
            return []
        try:
            return [int(guild_id.strip()) for guild_id in self.discord_guild_ids.split(',') if guild_id.strip()]
        except ValueError:
            raise ValueError("DISCORD_GUILD_IDS must be comma-separated integers")

    def validate(self):
        """Validate that required configuration is present"""
        if not self.discord_token:
            raise ValueError("DISCORD_TOKEN is required")
        if not self.riot_api_key:
            raise ValueError("RIOT_API_KEY is required")
        if not self.redis_url and not self.redis_hostname:
            raise ValueError("Either REDIS_URL or REDIS_HOSTNAME is required")
        if self.refresh_interval_hours <= 0:
            raise ValueError("REFRESH_INTERVAL_HOURS must be positive")
        if self.leaderboard_size <= 0:
            raise ValueError("LEADERBOARD_SIZE must be positive")
        if self.lookup_timeout <= 0:
            raise ValueError("LOOKUP_TIMEOUT must be positive")
        if self.riot_rate_limit <= 0 or self.riot_rate_window <= 0:
            raise ValueError("RIOT_RATE_LIMIT and RIOT_RATE_WINDOW must be positive")
        # Fail fast on malformed guild ids
        self.get_guild_ids()
