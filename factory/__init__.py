"""Factory package - Dependency injection for backend-agnostic code"""

from .client_factory import (
    create_cache_client,
    create_indicator_cache,
    create_indicator_service,
    create_indicator_store,
    create_market_data_provider,
)

__all__ = [
    "create_indicator_store",
    "create_market_data_provider",
    "create_cache_client",
    "create_indicator_cache",
    "create_indicator_service",
]
