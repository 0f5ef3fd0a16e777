"""
Market data models

Pydantic models for market data consumed by the indicator engine:
- Candle: OHLCV candlestick (read-only input)
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class Candle(BaseModel):
    """
    OHLCV candlestick

    Aggregated price data for one timeframe bucket. Within a
    (symbol, timeframe) partition there is at most one candle per timestamp.
    """

    timestamp: datetime = Field(description="Candle open timestamp (UTC)")
    symbol: str = Field(description="Trading pair")
    timeframe: str = Field(description="Timeframe (1m, 5m, 15m, 1h, 4h, 1d)")
    open: Decimal = Field(description="Opening price")
    high: Decimal = Field(description="Highest price in interval")
    low: Decimal = Field(description="Lowest price in interval")
    close: Decimal = Field(description="Closing price")
    volume: Decimal = Field(description="Total volume traded")
    trades_count: int = Field(default=0, description="Number of trades in interval")

    def price(self, field: str = "close") -> float:
        """Return one OHLCV field as float"""
        return float(getattr(self, field))
