"""
Moving average indicators

Implementations:
- SMA: Simple Moving Average
- WMA: Weighted Moving Average
"""

import numpy as np

from domain.indicators import window
from domain.indicators.base import BaseIndicator


class SMA(BaseIndicator):
    """
    Simple Moving Average

    Formula: SMA = SUM(Close) / N

    Example:
        >>> sma = SMA(period=20)
        >>> points = sma.compute_series(candles)  # len(candles) - 19 points
    """

    kind = "SMA"

    def aggregate(self, windows: np.ndarray) -> np.ndarray:
        return window.mean(windows)


class WMA(BaseIndicator):
    """
    Weighted Moving Average

    Formula: WMA = SUM(Price × Weight) / SUM(Weight)
    where Weight = 1, 2, ..., N (oldest to newest)
    """

    kind = "WMA"

    def aggregate(self, windows: np.ndarray) -> np.ndarray:
        return window.weighted_mean(windows)
