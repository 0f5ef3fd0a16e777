from abc import ABC, abstractmethod
from datetime import timedelta


class BaseCacheClient(ABC):
    """
    Abstract interface for caching layer

    Implementations:
    - RedisClient (providers/opensource/redis_client.py)
    """

    @abstractmethod
    async def connect(self) -> None:
        """Establish connection to cache service"""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """
        Get value by key

        Returns:
            Value as string, or None if not found
        """

    @abstractmethod
    async def set(self, key: str, value: str, ttl: timedelta | None = None) -> bool:
        """
        Set key-value with optional TTL

        Returns:
            True if successful
        """

    @abstractmethod
    async def delete(self, *keys: str) -> int:
        """
        Delete keys

        Returns:
            Number of keys removed
        """

    @abstractmethod
    async def close(self) -> None:
        """Close connection"""
