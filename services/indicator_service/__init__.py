"""
Indicator Service - Windowed Indicator Series

Scheduled + on-demand service that:
1. Reads candles from the market data provider (ClickHouse)
2. Computes fixed-window indicators (SMA, WMA, SUM, MAX, MIN, STDDEV)
3. Upserts series into the indicator store (PostgreSQL) by natural key
4. Publishes latest values to Redis
"""

from services.indicator_service.cache import IndicatorCache
from services.indicator_service.service import IndicatorService

__all__ = ["IndicatorCache", "IndicatorService"]
