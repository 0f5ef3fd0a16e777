"""
Pytest configuration for test suite

Markers:
- unit: Fast unit tests (no external dependencies)
- integration: Integration tests (requires Docker services)
- slow: Slow-running tests (>10 seconds)
"""

from datetime import UTC, datetime, timedelta
from decimal import Decimal

import pytest

from core.models.market_data import Candle

BASE_TIME = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)


def pytest_configure(config):
    """Register custom markers"""
    config.addinivalue_line("markers", "unit: Fast unit tests (no dependencies)")
    config.addinivalue_line(
        "markers", "integration: Integration tests (requires Docker)"
    )
    config.addinivalue_line("markers", "slow: Slow tests (>10 seconds)")


def make_candle(
    close: float,
    minute: int = 0,
    symbol: str = "BTCUSDT",
    timeframe: str = "1m",
    high: float | None = None,
    low: float | None = None,
) -> Candle:
    """Candle at BASE_TIME + minute, other prices defaulting to close"""
    return Candle(
        timestamp=BASE_TIME + timedelta(minutes=minute),
        symbol=symbol,
        timeframe=timeframe,
        open=Decimal(str(close)),
        high=Decimal(str(high if high is not None else close)),
        low=Decimal(str(low if low is not None else close)),
        close=Decimal(str(close)),
        volume=Decimal(100),
        trades_count=10,
    )


@pytest.fixture
def base_time() -> datetime:
    return BASE_TIME


@pytest.fixture
def candle_factory():
    """Build one-minute candles from a list of closes"""

    def _build(closes, symbol="BTCUSDT", timeframe="1m", start_minute=0):
        return [
            make_candle(close, start_minute + i, symbol=symbol, timeframe=timeframe)
            for i, close in enumerate(closes)
        ]

    return _build


@pytest.fixture
def candle_builder():
    """Single-candle builder (close, minute, high=..., low=...)"""
    return make_candle
