"""
Base service class for the SoloQ leaderboard bot.

Provides Redis access with retry logic for all service layer operations.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable

from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from soloqbot.utils.exceptions import StoreError

logger = logging.getLogger(__name__)


class BaseService:
    """Base class for services backed by the Redis store."""

    def __init__(self, redis_client):
        """
        Initialize base service with a Redis client.

        Args:
            redis_client: ``redis.asyncio.Redis`` created with ``decode_responses=True``
        """
        self.redis = redis_client

    async def execute_with_retry(self, func: Callable[[], Awaitable[Any]], operation: str,
                                 max_retries: int = 3) -> Any:
        """
        Execute a store operation with automatic retry on transient errors.

        Connection and timeout errors are retried with exponential backoff.
        Anything else, or the last failed attempt, is raised as StoreError.
        """
        for attempt in range(max_retries):
            try:
                return await func()
            except (RedisConnectionError, RedisTimeoutError) as e:
                if attempt == max_retries - 1:
                    raise StoreError(operation, str(e)) from e
                logger.warning(f"Retry attempt {attempt + 1} for {operation}: {e}")
                await asyncio.sleep(0.1 * (2 ** attempt))  # Exponential backoff
            except RedisError as e:
                raise StoreError(operation, str(e)) from e
