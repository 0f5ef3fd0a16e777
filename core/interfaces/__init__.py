"""Interfaces module - Abstract base classes for engine collaborators"""

from .cache import BaseCacheClient
from .indicator_store import BaseIndicatorStore
from .market_data import BaseMarketDataProvider

__all__ = [
    "BaseCacheClient",
    "BaseIndicatorStore",
    "BaseMarketDataProvider",
]
