"""
Unit tests for factory pattern

Tests that correct client implementations are created based on config
"""

from datetime import timedelta
from unittest.mock import patch

import pytest

from factory.client_factory import (
    create_cache_client,
    create_indicator_cache,
    create_indicator_service,
    create_indicator_store,
    create_market_data_provider,
)
from providers.memory.indicator_store import InMemoryIndicatorStore
from providers.opensource.clickhouse import ClickHouseCandleProvider
from providers.opensource.redis_client import RedisClient
from providers.postgres.indicator_store import PostgresIndicatorStore
from services.indicator_service.cache import IndicatorCache
from services.indicator_service.service import IndicatorService


@pytest.mark.unit
class TestIndicatorStoreFactory:
    """Test indicator store factory"""

    @patch("factory.client_factory.get_settings")
    def test_create_postgres_store(self, mock_settings):
        """Test that postgres backend creates PostgresIndicatorStore"""
        mock_settings.return_value.INDICATOR_STORE_BACKEND = "postgres"
        mock_settings.return_value.postgres_dsn = "postgresql://u:p@db:5432/trading"
        mock_settings.return_value.POSTGRES_POOL_MIN = 1
        mock_settings.return_value.POSTGRES_POOL_MAX = 4
        mock_settings.return_value.INDICATOR_UPSERT_CHUNK_SIZE = 500
        mock_settings.return_value.INDICATOR_STORE_TIMEOUT_SECONDS = 5.0

        store = create_indicator_store()

        assert isinstance(store, PostgresIndicatorStore)
        assert store.dsn == "postgresql://u:p@db:5432/trading"
        assert store.max_connections == 4
        assert store.chunk_size == 500
        assert store.timeout_seconds == 5.0

    @patch("factory.client_factory.get_settings")
    def test_create_memory_store(self, mock_settings):
        """Test that memory backend creates InMemoryIndicatorStore"""
        mock_settings.return_value.INDICATOR_STORE_BACKEND = "Memory"
        mock_settings.return_value.INDICATOR_UPSERT_CHUNK_SIZE = 1000

        assert isinstance(create_indicator_store(), InMemoryIndicatorStore)

    @patch("factory.client_factory.get_settings")
    def test_unsupported_backend_raises_error(self, mock_settings):
        """Test that unsupported backend raises ValueError"""
        mock_settings.return_value.INDICATOR_STORE_BACKEND = "mongodb"

        with pytest.raises(ValueError, match="Unsupported indicator store backend"):
            create_indicator_store()


@pytest.mark.unit
class TestClientFactories:
    """Provider / cache factories"""

    def test_create_market_data_provider(self):
        assert isinstance(create_market_data_provider(), ClickHouseCandleProvider)

    def test_create_cache_client(self):
        assert isinstance(create_cache_client(), RedisClient)

    @patch("factory.client_factory.get_settings")
    def test_create_indicator_cache(self, mock_settings):
        mock_settings.return_value.INDICATOR_CACHE_ENABLED = True
        mock_settings.return_value.INDICATOR_CACHE_TTL_SECONDS = 30

        cache = create_indicator_cache()

        assert isinstance(cache, IndicatorCache)
        assert isinstance(cache.cache, RedisClient)
        assert cache.ttl == timedelta(seconds=30)

    @patch("factory.client_factory.get_settings")
    def test_cache_disabled(self, mock_settings):
        mock_settings.return_value.INDICATOR_CACHE_ENABLED = False

        assert create_indicator_cache() is None

    @patch.dict("os.environ", {"INDICATOR_STORE_BACKEND": "memory"})
    @patch("factory.client_factory.get_settings")
    def test_create_indicator_service(self, mock_settings):
        from config.settings import Settings

        mock_settings.return_value = Settings()

        service = create_indicator_service()

        assert isinstance(service, IndicatorService)
        assert isinstance(service.provider, ClickHouseCandleProvider)
        assert isinstance(service.store, InMemoryIndicatorStore)
        assert isinstance(service.cache, IndicatorCache)
        assert service.fetch_limit == 5000
        assert service.max_period == 500
