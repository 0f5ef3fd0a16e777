"""
Unit tests for RedisClient

Tests TTL handling and error propagation with a mocked redis.asyncio client
"""

from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from providers.opensource.redis_client import RedisClient


@pytest.fixture
def mock_redis():
    """Mock redis.asyncio.Redis"""
    redis = MagicMock()
    redis.ping = AsyncMock(return_value=True)
    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    redis.aclose = AsyncMock()
    return redis


@pytest.fixture
def client(mock_redis):
    client = RedisClient(url="redis://localhost:6379/0")
    client.client = mock_redis
    return client


@pytest.mark.unit
class TestRedisClient:
    """Cache operations"""

    @pytest.mark.asyncio
    async def test_connect_pings(self, mock_redis):
        with patch("providers.opensource.redis_client.Redis.from_url", return_value=mock_redis):
            client = RedisClient(url="redis://localhost:6379/0")
            await client.connect()

        mock_redis.ping.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_set_with_ttl(self, client, mock_redis):
        assert await client.set("key", "value", ttl=timedelta(seconds=60)) is True

        mock_redis.set.assert_awaited_once_with("key", "value", ex=60)

    @pytest.mark.asyncio
    async def test_set_without_ttl(self, client, mock_redis):
        await client.set("key", "value")

        mock_redis.set.assert_awaited_once_with("key", "value", ex=None)

    @pytest.mark.asyncio
    async def test_get(self, client, mock_redis):
        mock_redis.get.return_value = "cached"

        assert await client.get("key") == "cached"

    @pytest.mark.asyncio
    async def test_delete(self, client, mock_redis):
        assert await client.delete("a", "b") == 1

        mock_redis.delete.assert_awaited_once_with("a", "b")

    @pytest.mark.asyncio
    async def test_errors_propagate(self, client, mock_redis):
        mock_redis.get.side_effect = ConnectionError("redis down")

        with pytest.raises(ConnectionError):
            await client.get("key")

    @pytest.mark.asyncio
    async def test_not_connected(self):
        client = RedisClient(url="redis://localhost:6379/0")

        with pytest.raises(RuntimeError, match="not connected"):
            await client.get("key")

    @pytest.mark.asyncio
    async def test_close(self, client, mock_redis):
        await client.close()

        mock_redis.aclose.assert_awaited_once()
