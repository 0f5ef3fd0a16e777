"""
Abstract base class for market data providers

Read-only source of ordered candles for the indicator engine
"""

from abc import ABC, abstractmethod
from datetime import datetime

from core.models.market_data import Candle

DEFAULT_FETCH_LIMIT = 5000


class BaseMarketDataProvider(ABC):
    """
    Abstract base class for candle sources

    Implementations:
    - ClickHouseCandleProvider (providers/opensource/clickhouse.py)

    Example:
        >>> provider = ClickHouseCandleProvider()
        >>> await provider.connect()
        >>> candles = await provider.fetch("BTCUSDT", "1m", limit=20)
        >>> candles[0].timestamp < candles[-1].timestamp
        True
    """

    @abstractmethod
    async def connect(self) -> None:
        """Establish connection to the candle source"""

    @abstractmethod
    async def fetch(
        self,
        symbol: str,
        timeframe: str,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        limit: int = DEFAULT_FETCH_LIMIT,
    ) -> list[Candle]:
        """
        Fetch candles for one (symbol, timeframe) partition

        Args:
            symbol: Trading pair (e.g., BTCUSDT)
            timeframe: Candle interval (e.g., 1m, 5m, 1h)
            start_time: Inclusive lower bound (optional)
            end_time: Inclusive upper bound (optional)
            limit: Maximum candles; the most recent `limit` within the
                bounds are returned

        Returns:
            Candles ascending by timestamp, one per timestamp
        """

    @abstractmethod
    async def close(self) -> None:
        """Close connection"""
