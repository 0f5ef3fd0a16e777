"""
Client factory - Auto-create clients based on configuration

Dependency injection pattern: the service receives its provider, store and
cache explicitly, the factory decides which implementations to build.
"""

import logging
from datetime import timedelta

from config.settings import get_settings
from core.interfaces.cache import BaseCacheClient
from core.interfaces.indicator_store import BaseIndicatorStore
from core.interfaces.market_data import BaseMarketDataProvider

logger = logging.getLogger(__name__)


def create_indicator_store() -> BaseIndicatorStore:
    """
    Create indicator store based on INDICATOR_STORE_BACKEND config

    Returns:
        BaseIndicatorStore: PostgreSQL (postgres) or in-memory (memory)

    Examples:
        >>> # .env: INDICATOR_STORE_BACKEND=postgres
        >>> store = create_indicator_store()  # Returns PostgresIndicatorStore
        >>>
        >>> # .env: INDICATOR_STORE_BACKEND=memory
        >>> store = create_indicator_store()  # Returns InMemoryIndicatorStore
    """
    settings = get_settings()
    backend = settings.INDICATOR_STORE_BACKEND.lower()

    if backend == "postgres":
        from providers.postgres.indicator_store import PostgresIndicatorStore

        logger.info("✓ Creating PostgresIndicatorStore (postgres)")
        return PostgresIndicatorStore(
            dsn=settings.postgres_dsn,
            min_connections=settings.POSTGRES_POOL_MIN,
            max_connections=settings.POSTGRES_POOL_MAX,
            chunk_size=settings.INDICATOR_UPSERT_CHUNK_SIZE,
            timeout_seconds=settings.INDICATOR_STORE_TIMEOUT_SECONDS,
        )

    elif backend == "memory":
        from providers.memory.indicator_store import InMemoryIndicatorStore

        logger.info("✓ Creating InMemoryIndicatorStore (memory)")
        return InMemoryIndicatorStore(chunk_size=settings.INDICATOR_UPSERT_CHUNK_SIZE)

    else:
        raise ValueError(
            f"Unsupported indicator store backend: {backend}. Supported: postgres, memory"
        )


def create_market_data_provider() -> BaseMarketDataProvider:
    """
    Create candle source

    Currently always returns ClickHouseCandleProvider

    Returns:
        BaseMarketDataProvider: ClickHouse candle reader
    """
    from providers.opensource.clickhouse import ClickHouseCandleProvider

    logger.info("Creating ClickHouseCandleProvider")
    return ClickHouseCandleProvider()


def create_cache_client() -> BaseCacheClient:
    """
    Create cache client

    Currently always returns RedisClient

    Returns:
        BaseCacheClient: Redis client
    """
    from providers.opensource.redis_client import RedisClient

    logger.info("Creating RedisClient")
    return RedisClient()


def create_indicator_cache():
    """
    Create latest-value cache, or None when INDICATOR_CACHE_ENABLED is false

    Returns:
        IndicatorCache | None
    """
    from services.indicator_service.cache import IndicatorCache

    settings = get_settings()
    if not settings.INDICATOR_CACHE_ENABLED:
        logger.info("Indicator cache disabled")
        return None

    return IndicatorCache(
        create_cache_client(),
        ttl=timedelta(seconds=settings.INDICATOR_CACHE_TTL_SECONDS),
    )


def create_indicator_service():
    """
    Create a fully wired IndicatorService (provider + store + cache)

    Clients are created unconnected; callers connect them before use.

    Returns:
        IndicatorService
    """
    from services.indicator_service.service import IndicatorService

    settings = get_settings()
    return IndicatorService(
        provider=create_market_data_provider(),
        store=create_indicator_store(),
        cache=create_indicator_cache(),
        fetch_limit=settings.INDICATOR_FETCH_LIMIT,
        series_count=settings.INDICATOR_SERIES_COUNT,
        query_limit=settings.INDICATOR_QUERY_LIMIT,
        max_period=settings.INDICATOR_MAX_PERIOD,
    )
