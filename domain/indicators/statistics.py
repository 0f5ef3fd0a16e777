"""
Rolling window statistics

Implementations:
- SUM: Rolling sum of closes
- MAX: Rolling highest high
- MIN: Rolling lowest low
- STDDEV: Rolling population standard deviation of closes
"""

import numpy as np

from domain.indicators import window
from domain.indicators.base import BaseIndicator


class SUM(BaseIndicator):
    kind = "SUM"

    def aggregate(self, windows: np.ndarray) -> np.ndarray:
        return window.sequential_sum(windows)


class MAX(BaseIndicator):
    """Highest high over the last N candles (Donchian upper band)"""

    kind = "MAX"
    price_field = "high"

    def aggregate(self, windows: np.ndarray) -> np.ndarray:
        return window.maximum(windows)


class MIN(BaseIndicator):
    """Lowest low over the last N candles (Donchian lower band)"""

    kind = "MIN"
    price_field = "low"

    def aggregate(self, windows: np.ndarray) -> np.ndarray:
        return window.minimum(windows)


class STDDEV(BaseIndicator):
    """
    Standard deviation of closes

    Formula: sqrt(SUM((Close - SMA)^2) / N)

    Used as the width term of Bollinger Bands.
    """

    kind = "STDDEV"

    def aggregate(self, windows: np.ndarray) -> np.ndarray:
        return window.std_dev(windows)
