"""
Indicator Cache - latest computed point per series

Key:   indicators:{kind}:{symbol}:{timeframe}:{parameter identity}
Value: JSON {timestamp, value}
TTL:   INDICATOR_CACHE_TTL_SECONDS (default 60s)

The cache is an accelerator, never a source of truth: failures are logged
and reported as misses, they never fail the calling operation.
"""

import json
import logging
from datetime import datetime, timedelta

from core.interfaces.cache import BaseCacheClient
from core.models.indicators import IndicatorPoint, SeriesKey

logger = logging.getLogger(__name__)


class IndicatorCache:
    """Latest-value snapshots in a cache client (Redis)"""

    def __init__(self, cache: BaseCacheClient, ttl: timedelta = timedelta(seconds=60)):
        self.cache = cache
        self.ttl = ttl

    async def publish_latest(self, series_key: SeriesKey, point: IndicatorPoint) -> bool:
        """
        Write the latest point of a series

        Returns:
            True if written, False on cache failure
        """
        try:
            value = {"timestamp": point.timestamp.isoformat(), "value": point.value}
            await self.cache.set(series_key.cache_key, json.dumps(value), ttl=self.ttl)
            logger.debug(f"✓ Cached latest {series_key.cache_key}")
            return True

        except Exception as e:
            # Cache miss is acceptable - log but don't crash
            logger.error(f"✗ Cache write failed for {series_key.cache_key}: {e}")
            return False

    async def get_latest(self, series_key: SeriesKey) -> IndicatorPoint | None:
        """
        Read the latest cached point

        Returns:
            IndicatorPoint or None on miss/error
        """
        try:
            cached = await self.cache.get(series_key.cache_key)
            if not cached:
                return None

            data = json.loads(cached)
            return IndicatorPoint(
                timestamp=datetime.fromisoformat(data["timestamp"]),
                value=data["value"],
            )

        except Exception as e:
            logger.error(f"Cache read error for {series_key.cache_key}: {e}")
            return None

    async def evict(self, series_key: SeriesKey) -> None:
        try:
            await self.cache.delete(series_key.cache_key)
        except Exception as e:
            logger.error(f"✗ Cache evict failed for {series_key.cache_key}: {e}")
