"""
Window calculator

Pure numeric engine shared by every windowed indicator kind:

    compute_series(prices, w)  -> one output per window end position
    compute_single(values, w)  -> aggregate of exactly one window

An aggregate maps a 2-D array of windows (one row per window, oldest value
first) to a 1-D array of outputs. Sums accumulate strictly left to right
(np.add.accumulate), never pairwise, so repeated runs are bit-identical and
match a plain Python loop over the window.
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from decimal import Decimal

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from core.errors import (
    InsufficientDataError,
    InvalidParameterError,
    ParameterErrorReason,
    ParameterMismatchError,
)
from core.models.indicators import IndicatorPoint

Aggregate = Callable[[np.ndarray], np.ndarray]
PricePoint = tuple[datetime, float | Decimal]


def sequential_sum(windows: np.ndarray) -> np.ndarray:
    """Left-to-right sum of each row"""
    return np.add.accumulate(windows, axis=1)[:, -1]


def mean(windows: np.ndarray) -> np.ndarray:
    """Arithmetic mean of each window"""
    return sequential_sum(windows) / windows.shape[1]


def weighted_mean(windows: np.ndarray) -> np.ndarray:
    """Linearly weighted mean (weights 1..N, newest value heaviest)"""
    weights = np.arange(1, windows.shape[1] + 1, dtype=np.float64)
    return sequential_sum(windows * weights) / float(weights.sum())


def maximum(windows: np.ndarray) -> np.ndarray:
    return windows.max(axis=1)


def minimum(windows: np.ndarray) -> np.ndarray:
    return windows.min(axis=1)


def std_dev(windows: np.ndarray) -> np.ndarray:
    """Population standard deviation of each window"""
    deviations = windows - mean(windows)[:, np.newaxis]
    return np.sqrt(sequential_sum(deviations * deviations) / windows.shape[1])


def _check_window_size(window_size: int) -> None:
    if window_size <= 0:
        raise InvalidParameterError(
            ParameterErrorReason.NOT_POSITIVE,
            f"window size must be greater than 0, got {window_size}",
        )


def compute_series(
    prices: Sequence[PricePoint],
    window_size: int,
    aggregate: Aggregate = mean,
) -> list[IndicatorPoint]:
    """
    Aggregate every full window of an ordered price sequence

    Args:
        prices: (timestamp, value) pairs, ascending by timestamp
        window_size: Number of values per window
        aggregate: Window statistic (defaults to arithmetic mean)

    Returns:
        len(prices) - window_size + 1 points, each stamped with the
        timestamp of its window's last element

    Raises:
        InvalidParameterError: window_size <= 0
        InsufficientDataError: fewer prices than window_size
    """
    _check_window_size(window_size)

    if len(prices) < window_size:
        raise InsufficientDataError(required=window_size, available=len(prices))

    values = np.fromiter((float(v) for _, v in prices), dtype=np.float64, count=len(prices))
    outputs = aggregate(sliding_window_view(values, window_size))

    return [
        IndicatorPoint(timestamp=prices[i][0], value=float(outputs[i - window_size + 1]))
        for i in range(window_size - 1, len(prices))
    ]


def compute_single(
    window: Sequence[float | Decimal],
    window_size: int,
    aggregate: Aggregate = mean,
) -> float:
    """
    Aggregate one window of exactly window_size values (real-time path)

    Raises:
        InvalidParameterError: window_size <= 0
        ParameterMismatchError: len(window) != window_size
    """
    _check_window_size(window_size)

    if len(window) != window_size:
        raise ParameterMismatchError(expected=window_size, actual=len(window))

    values = np.asarray([float(v) for v in window], dtype=np.float64)
    return float(aggregate(values[np.newaxis, :])[0])
