"""Models module - Pydantic data models"""

from .indicators import IndicatorPoint, IndicatorRecord, SeriesKey
from .market_data import Candle

__all__ = [
    "Candle",
    "IndicatorPoint",
    "IndicatorRecord",
    "SeriesKey",
]
