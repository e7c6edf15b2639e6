"""
Custom exceptions for the leaderboard bot with user-friendly error messages.
"""

from typing import Optional

from soloqbot.constants import RegistrationConstants


class SoloQBotException(Exception):
    """Base exception for leaderboard bot errors."""
    def __init__(self, message: str, user_message: Optional[str] = None):
        super().__init__(message)
        self.user_message = user_message or message


# User input errors

class InvalidSummonerNameError(SoloQBotException):
    """Raised when a summoner name fails validation before any lookup."""
    def __init__(self, name: str):
        super().__init__(
            f"Invalid summoner name {name!r}",
            f"❌ Summoner names must be {RegistrationConstants.MIN_NAME_LENGTH}-"
            f"{RegistrationConstants.MAX_NAME_LENGTH} characters long."
        )


class SummonerNotFoundError(SoloQBotException):
    """Raised when the ranking provider does not know a summoner name."""
    def __init__(self, name: str):
        super().__init__(
            f"Summoner {name!r} not found",
            "❌ Invalid summoner name"
        )


# Infrastructure errors

class StoreError(SoloQBotException):
    """Raised when Redis operations fail. Safe to retry."""
    def __init__(self, operation: str, details: Optional[str] = None):
        super().__init__(
            f"Store error during {operation}: {details}",
            "❌ Database error occurred. Please try again later."
        )
        self.operation = operation


class RankingProviderError(SoloQBotException):
    """Raised when the Riot API returns an error or cannot be reached."""
    def __init__(self, operation: str, status: Optional[int] = None, details: Optional[str] = None):
        super().__init__(
            f"Riot API error during {operation} (status={status}): {details}",
            "❌ Riot API is unavailable right now. Please try again later."
        )
        self.operation = operation
        self.status = status


class ChatPlatformError(SoloQBotException):
    """Raised when a Discord request fails."""
    def __init__(self, operation: str, details: Optional[str] = None):
        super().__init__(
            f"Discord error during {operation}: {details}",
            "❌ Discord request failed. Please try again later."
        )
        self.operation = operation


class ScoreboardPublishError(ChatPlatformError):
    """Raised when the leaderboard message or its channel no longer exists."""
    def __init__(self, channel_id: int, message_id: int):
        super().__init__(
            "publish",
            f"leaderboard message {message_id} in channel {channel_id} is gone; run /leaderboard again"
        )
        self.channel_id = channel_id
        self.message_id = message_id
