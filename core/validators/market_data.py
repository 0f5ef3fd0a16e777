"""
Data quality checks for candle sequences

Enforces the ordering contract the window calculator relies on:
- one (symbol, timeframe) partition per sequence
- ascending timestamps
- at most one candle per timestamp
"""

import logging

from core.models.market_data import Candle

logger = logging.getLogger(__name__)


def normalize_candles(candles: list[Candle]) -> list[Candle]:
    """
    Return candles sorted ascending with duplicate timestamps collapsed

    When two candles share a timestamp the later one in the input wins
    (a corrected candle supersedes the original).

    Raises:
        ValueError: If candles span more than one (symbol, timeframe)

    Example:
        >>> normalize_candles([c_0902, c_0901, c_0901_corrected])
        [c_0901_corrected, c_0902]
    """
    if not candles:
        return []

    partitions = {(c.symbol, c.timeframe) for c in candles}
    if len(partitions) > 1:
        raise ValueError(f"Candles span multiple partitions: {sorted(partitions)}")

    by_timestamp: dict = {}
    for candle in candles:
        by_timestamp[candle.timestamp] = candle

    duplicates = len(candles) - len(by_timestamp)
    if duplicates:
        symbol, timeframe = partitions.pop()
        logger.warning(
            f"⚠️ Dropped {duplicates} duplicate candles for {symbol}/{timeframe}"
        )

    return [by_timestamp[ts] for ts in sorted(by_timestamp)]


def is_ordered(candles: list[Candle]) -> bool:
    """True if timestamps are strictly ascending"""
    return all(a.timestamp < b.timestamp for a, b in zip(candles, candles[1:]))
