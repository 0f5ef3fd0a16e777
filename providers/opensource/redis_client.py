"""
Redis implementation of cache client

Holds the latest computed point of each indicator series
"""

import logging
from datetime import timedelta

from redis.asyncio import Redis

from config.settings import get_settings
from core.interfaces.cache import BaseCacheClient

logger = logging.getLogger(__name__)


class RedisClient(BaseCacheClient):
    """
    Redis implementation

    Features:
    - In-memory storage (microsecond latency)
    - TTL support
    """

    def __init__(self, url: str | None = None):
        self.url = url or get_settings().redis_url
        self.client: Redis | None = None

    async def connect(self) -> None:
        """Connect to Redis"""
        try:
            self.client = Redis.from_url(self.url, decode_responses=True)
            # Test connection
            await self.client.ping()
            logger.info("✓ Connected to Redis")
        except Exception as e:
            logger.error(f"✗ Failed to connect to Redis: {e}")
            raise

    async def get(self, key: str) -> str | None:
        """Get value by key"""
        if not self.client:
            raise RuntimeError("Redis client not connected")

        try:
            return await self.client.get(key)
        except Exception as e:
            logger.error(f"✗ Redis GET error: {e}")
            raise

    async def set(self, key: str, value: str, ttl: timedelta | None = None) -> bool:
        """Set key-value with optional TTL"""
        if not self.client:
            raise RuntimeError("Redis client not connected")

        try:
            ex = int(ttl.total_seconds()) if ttl else None
            return bool(await self.client.set(key, value, ex=ex))
        except Exception as e:
            logger.error(f"✗ Redis SET error: {e}")
            raise

    async def delete(self, *keys: str) -> int:
        """Delete one or more keys"""
        if not self.client:
            raise RuntimeError("Redis client not connected")

        try:
            return await self.client.delete(*keys)
        except Exception as e:
            logger.error(f"✗ Redis DELETE error: {e}")
            raise

    async def close(self) -> None:
        """Close connection"""
        if self.client:
            await self.client.aclose()
            logger.info("✓ Redis connection closed")
