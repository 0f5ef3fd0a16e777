"""
Technical indicators module

Exports:
- BaseIndicator (domain/indicators/base.py)
- Moving averages: SMA, WMA
- Rolling statistics: SUM, MAX, MIN, STDDEV
- Registry: IndicatorRegistry
"""

from domain.indicators.base import BaseIndicator
from domain.indicators.moving_averages import SMA, WMA
from domain.indicators.registry import IndicatorRegistry
from domain.indicators.statistics import MAX, MIN, STDDEV, SUM

__all__ = [
    "BaseIndicator",
    "SMA",
    "WMA",
    "SUM",
    "MAX",
    "MIN",
    "STDDEV",
    "IndicatorRegistry",
]
