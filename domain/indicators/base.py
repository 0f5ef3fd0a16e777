"""
Base class for windowed technical indicators

Every indicator kind plugs a window statistic into the shared window
calculator; the windowing contract itself never changes.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from decimal import Decimal
from typing import ClassVar

import numpy as np

from core.models.indicators import IndicatorPoint
from core.models.market_data import Candle
from domain.indicators import params as codec
from domain.indicators import window


class BaseIndicator(ABC):
    """
    Windowed indicator interface

    Design principle:
    - Pure calculation logic (no database dependency)
    - Testable with mock data
    - `kind` is the persisted tag; `parameter_identity` the persisted
      configuration discriminator

    Implementations:
    - SMA, WMA (domain/indicators/moving_averages.py)
    - SUM, MAX, MIN, STDDEV (domain/indicators/statistics.py)
    """

    kind: ClassVar[str]
    price_field: ClassVar[str] = "close"

    def __init__(self, period: int, max_period: int = codec.MAX_PERIOD):
        """
        Initialize indicator

        Args:
            period: Window length
            max_period: Ceiling enforced by the parameter codec
        """
        self.params = codec.validate({"period": period}, max_period)
        self.period = self.params["period"]

    @abstractmethod
    def aggregate(self, windows: np.ndarray) -> np.ndarray:
        """
        Reduce each window to one value

        Args:
            windows: 2-D array, one row per window, oldest value first

        Returns:
            1-D array with one output per row
        """

    @property
    def parameter_identity(self) -> str:
        """Canonical parameter string, e.g. {"period":20}"""
        return codec.canonicalize(self.params)

    def compute_series(self, candles: Sequence[Candle]) -> list[IndicatorPoint]:
        """
        Compute one value per full window of candles

        Raises:
            InsufficientDataError: If fewer candles than the period
        """
        prices = [(c.timestamp, c.price(self.price_field)) for c in candles]
        return window.compute_series(prices, self.period, self.aggregate)

    def compute_single(self, values: Sequence[float | Decimal]) -> float:
        """
        Aggregate exactly `period` values (most recent window only)

        Raises:
            ParameterMismatchError: If len(values) != period
        """
        return window.compute_single(values, self.period, self.aggregate)

    def __repr__(self) -> str:
        params_str = ", ".join(f"{k}={v}" for k, v in self.params.items())
        return f"{self.kind}({params_str})"
