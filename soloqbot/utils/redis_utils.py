"""
Redis utility module for centralized Redis configuration and connection logic.

Provides secure Redis connection management with production validation.
"""

import logging
from typing import Optional
from urllib.parse import quote

import redis.asyncio as redis
from redis.exceptions import RedisError

from soloqbot.config import Config
from soloqbot.utils.exceptions import StoreError

logger = logging.getLogger(__name__)


class RedisUtils:
    """Centralized Redis configuration and connection utilities."""

    @staticmethod
    def get_redis_url(config: Config) -> Optional[str]:
        """Get the Redis URL from REDIS_URL or the host/port/password triple."""
        if config.redis_url:
            return config.redis_url

        if not config.redis_hostname:
            return None

        if config.redis_password:
            return (
                f"redis://default:{quote(config.redis_password, safe='')}"
                f"@{config.redis_hostname}:{config.redis_port}"
            )
        return f"redis://{config.redis_hostname}:{config.redis_port}"

    @staticmethod
    def validate_redis_security(redis_url: str, config: Config) -> bool:
        """Validate that Redis URL meets security requirements."""
        if not redis_url:
            return False

        if config.debug:
            # Development mode - allow anything, but say so
            if not (redis_url.startswith('redis://localhost') or redis_url.startswith('redis://127.0.0.1')
                    or redis_url.startswith('rediss://') or '@' in redis_url):
                logger.warning("Development mode: Redis connection without authentication")
            return True

        # Production mode - the store must require authentication
        if '@' not in redis_url:
            logger.error("Production Redis must include authentication credentials")
            return False
        return True

    @staticmethod
    async def create_redis_client(config: Config) -> 'redis.Redis':
        """
        Create a Redis client and check the connection.

        Raises:
            StoreError: If no usable URL is configured or Redis is unreachable
        """
        redis_url = RedisUtils.get_redis_url(config)
        if not redis_url:
            raise StoreError("connect", "no Redis URL configured")
        if not RedisUtils.validate_redis_security(redis_url, config):
            raise StoreError("connect", "insecure Redis configuration")

        client = redis.from_url(redis_url, decode_responses=True)
        try:
            # Test connection
            await client.ping()
        except RedisError as e:
            await client.aclose()
            raise StoreError("connect", str(e)) from e

        logger.info("Successfully connected to Redis")
        return client
