"""
Bot-wide constants for the SoloQ leaderboard bot.

Redis key names, Riot API routing values and Discord limits used throughout
the codebase.
"""


class StoreKeys:
    """Reserved Redis keys. Every other key is a registered summoner."""

    SCOREBOARD_CHANNEL = "scoreboard_channel"
    SCOREBOARD_MESSAGE = "scoreboard_message"

    RESERVED = frozenset({SCOREBOARD_CHANNEL, SCOREBOARD_MESSAGE})

    # Value written by registrations that predate stored display names
    LEGACY_VALUE = "1"


class RiotConstants:
    """Constants for the Riot Games API."""

    # Only solo queue entries are shown on the leaderboard
    RANKED_SOLO_QUEUE = "RANKED_SOLO_5x5"

    TOKEN_HEADER = "X-Riot-Token"

    # Single retry after a 429 when Riot sends no Retry-After header
    DEFAULT_RETRY_AFTER = 1.0

    REQUEST_TIMEOUT = 15


class RegistrationConstants:
    """Limits for the /register command option."""

    MIN_NAME_LENGTH = 3
    MAX_NAME_LENGTH = 16

    # Per-user rate limit for /register
    RATE_LIMIT = 3
    RATE_WINDOW = 60


class LeaderboardConstants:
    """Constants for the leaderboard message."""

    DEFAULT_SIZE = 10

    # Discord embed description limit
    MAX_DESCRIPTION_LENGTH = 4096

    LOADING_CONTENT = "Loading..."

    VETERAN_MARKER = "👴"
    HOT_STREAK_MARKER = "🔥"

    EMBED_COLOR = 0x3498db

    PRESENCE_TEXT = "league players smh"
