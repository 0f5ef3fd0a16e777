"""
Indicator Service - orchestration of provider → calculator → store

Operations:
    recompute_and_store()  fetch candles, compute series, upsert, return series
    get_series()           latest N stored points, chronological
    get_range()            stored points within time bounds, newest first
    get_latest_value()     real-time single value, bypasses the store
    peek_latest()          last value published to the snapshot cache
    purge_series()         drop a whole series (forces full recompute)

Parameters are validated before any I/O. Store and provider errors
propagate unchanged; no partial result is returned alongside an error.
"""

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from core.errors import InsufficientDataError
from core.interfaces.indicator_store import BaseIndicatorStore
from core.interfaces.market_data import DEFAULT_FETCH_LIMIT, BaseMarketDataProvider
from core.models.indicators import IndicatorPoint, IndicatorRecord, SeriesKey
from core.validators.market_data import is_ordered, normalize_candles
from domain.indicators import params as codec
from domain.indicators.base import BaseIndicator
from domain.indicators.registry import IndicatorRegistry
from services.indicator_service.cache import IndicatorCache

logger = logging.getLogger(__name__)


class IndicatorService:
    """Compute, persist and query windowed indicator series"""

    def __init__(
        self,
        provider: BaseMarketDataProvider,
        store: BaseIndicatorStore,
        cache: IndicatorCache | None = None,
        *,
        fetch_limit: int = DEFAULT_FETCH_LIMIT,
        series_count: int = 100,
        query_limit: int = 1000,
        max_period: int = codec.MAX_PERIOD,
    ):
        self.provider = provider
        self.store = store
        self.cache = cache
        self.fetch_limit = fetch_limit
        self.series_count = series_count
        self.query_limit = query_limit
        self.max_period = max_period

    def _resolve(
        self, symbol: str, timeframe: str, kind: str, params: Mapping[str, Any]
    ) -> tuple[BaseIndicator, SeriesKey]:
        """Validate kind + params and derive the series key (no I/O)"""
        indicator = IndicatorRegistry.resolve(kind, params, self.max_period)
        series_key = SeriesKey(
            symbol=symbol,
            timeframe=timeframe,
            indicator_kind=indicator.kind,
            parameter_identity=indicator.parameter_identity,
        )
        return indicator, series_key

    @staticmethod
    def _limit(value: int | None, default: int, name: str) -> int:
        return default if value is None else codec.validate_limit(value, name)

    async def _fetch_candles(self, symbol, timeframe, start_time, end_time, limit):
        candles = await self.provider.fetch(
            symbol=symbol,
            timeframe=timeframe,
            start_time=start_time,
            end_time=end_time,
            limit=limit,
        )
        if not is_ordered(candles):
            logger.warning(f"Provider returned unordered candles for {symbol}/{timeframe}")
            candles = normalize_candles(candles)
        return candles

    async def recompute_and_store(
        self,
        symbol: str,
        timeframe: str,
        kind: str,
        params: Mapping[str, Any],
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        limit: int | None = None,
    ) -> list[IndicatorPoint]:
        """
        Compute an indicator series from candles and upsert it

        Args:
            symbol: Trading pair (BTCUSDT)
            timeframe: Candle interval (1m, 5m, 1h)
            kind: Indicator kind (SMA, WMA, ...)
            params: Indicator parameters ({"period": 20})
            start_time: Inclusive lower bound for candles (optional)
            end_time: Inclusive upper bound for candles (optional)
            limit: Max candles to read (default fetch_limit)

        Returns:
            The freshly computed series (not re-read from the store)

        Raises:
            InvalidParameterError: Before any I/O
            InsufficientDataError: Fewer candles than the period
            StoreUnavailableError: Upsert failed (safe to retry)
        """
        indicator, series_key = self._resolve(symbol, timeframe, kind, params)
        limit = self._limit(limit, self.fetch_limit, "limit")

        candles = await self._fetch_candles(symbol, timeframe, start_time, end_time, limit)
        if len(candles) < indicator.period:
            raise InsufficientDataError(required=indicator.period, available=len(candles))

        points = indicator.compute_series(candles)

        records = [
            IndicatorRecord(
                symbol=symbol,
                timeframe=timeframe,
                timestamp=point.timestamp,
                indicator_kind=series_key.indicator_kind,
                parameter_identity=series_key.parameter_identity,
                value=point.value,
            )
            for point in points
        ]
        await self.store.upsert(records)

        if self.cache is not None:
            await self.cache.publish_latest(series_key, points[-1])

        logger.info(
            f"✅ {indicator!r} {symbol}/{timeframe}: "
            f"{len(points)} points from {len(candles)} candles"
        )
        return points

    async def get_series(
        self,
        symbol: str,
        timeframe: str,
        kind: str,
        params: Mapping[str, Any],
        count: int | None = None,
    ) -> list[IndicatorPoint]:
        """Most recent `count` stored points, chronological order"""
        _, series_key = self._resolve(symbol, timeframe, kind, params)
        count = self._limit(count, self.series_count, "count")
        records = await self.store.query_latest(series_key, count)
        return [record.to_point() for record in records]

    async def get_range(
        self,
        symbol: str,
        timeframe: str,
        kind: str,
        params: Mapping[str, Any],
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        limit: int | None = None,
    ) -> list[IndicatorPoint]:
        """Stored points within inclusive bounds, newest first"""
        _, series_key = self._resolve(symbol, timeframe, kind, params)
        limit = self._limit(limit, self.query_limit, "limit")
        records = await self.store.query_range(series_key, start_time, end_time, limit)
        return [record.to_point() for record in records]

    async def get_latest_value(
        self,
        symbol: str,
        timeframe: str,
        kind: str,
        params: Mapping[str, Any],
    ) -> IndicatorPoint | None:
        """
        Compute the indicator for the most recent window only

        Reads exactly `period` candles and never touches the store.

        Returns:
            Latest point, or None if fewer than `period` candles exist yet
        """
        indicator, _ = self._resolve(symbol, timeframe, kind, params)

        candles = await self._fetch_candles(symbol, timeframe, None, None, indicator.period)
        if len(candles) < indicator.period:
            logger.debug(
                f"{indicator!r} {symbol}/{timeframe}: "
                f"{len(candles)}/{indicator.period} candles, no value yet"
            )
            return None

        window = candles[-indicator.period :]
        value = indicator.compute_single([c.price(indicator.price_field) for c in window])
        return IndicatorPoint(timestamp=window[-1].timestamp, value=value)

    async def peek_latest(
        self,
        symbol: str,
        timeframe: str,
        kind: str,
        params: Mapping[str, Any],
    ) -> IndicatorPoint | None:
        """Latest point published by the last recompute (None on miss)"""
        _, series_key = self._resolve(symbol, timeframe, kind, params)
        if self.cache is None:
            return None
        return await self.cache.get_latest(series_key)

    async def purge_series(
        self,
        symbol: str,
        timeframe: str,
        kind: str,
        params: Mapping[str, Any],
    ) -> int:
        """
        Delete every stored point of a series

        Returns:
            Number of rows deleted
        """
        _, series_key = self._resolve(symbol, timeframe, kind, params)
        deleted = await self.store.purge_series(series_key)

        if self.cache is not None:
            await self.cache.evict(series_key)

        logger.info(f"🗑️ Purged {deleted} points of {series_key.cache_key}")
        return deleted
