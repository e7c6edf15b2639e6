"""
Rate limiting infrastructure.

Simple in-memory sliding windows using deques. Used both for per-user command
limits and to keep Riot API calls under the key's request budget.
"""

import asyncio
import logging
import time
from collections import defaultdict, deque
from functools import wraps

logger = logging.getLogger(__name__)


class SimpleRateLimiter:
    """In-memory sliding window rate limiter.

    Note: request history is kept per key in memory. Keys are user:command
    pairs and a single key for the Riot client, so growth is bounded by the
    number of users who run commands.
    """

    def __init__(self, clock=time.monotonic):
        self._requests = defaultdict(deque)
        self._lock = asyncio.Lock()
        self._clock = clock

    def _prune(self, key: str, now: float, window: float):
        history = self._requests[key]
        while history and history[0] <= now - window:
            history.popleft()

    async def is_allowed(self, key: str, limit: int, window: float) -> bool:
        """Record a request for ``key`` if it is under the limit."""
        # Input validation: reject invalid parameters
        if limit <= 0 or window <= 0:
            return False

        now = self._clock()
        async with self._lock:
            self._prune(key, now, window)
            if len(self._requests[key]) < limit:
                self._requests[key].append(now)
                return True
            return False

    async def acquire(self, key: str, limit: int, window: float):
        """Wait until a request for ``key`` fits in the window, then record it."""
        if limit <= 0 or window <= 0:
            raise ValueError("limit and window must be positive")

        while True:
            async with self._lock:
                now = self._clock()
                self._prune(key, now, window)
                history = self._requests[key]
                if len(history) < limit:
                    history.append(now)
                    return
                wait = history[0] + window - now
            logger.debug(f"Rate limit reached for {key}, waiting {wait:.2f}s")
            await asyncio.sleep(max(wait, 0.01))


def rate_limit(command: str, limit: int = 1, window: int = 60):
    """Decorator for rate limiting Discord slash commands per user."""
    def decorator(func):
        @wraps(func)
        async def wrapper(self, interaction, *args, **kwargs):
            rate_limiter = self.bot.rate_limiter

            if not await rate_limiter.is_allowed(f"{interaction.user.id}:{command}", limit, window):
                await interaction.response.send_message(
                    f"⏰ Rate limit exceeded. Please wait before using `/{command}` again.",
                    ephemeral=True
                )
                return

            return await func(self, interaction, *args, **kwargs)
        return wrapper
    return decorator
