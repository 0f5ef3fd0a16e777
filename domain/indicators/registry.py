"""
Indicator registry for managing and creating indicators

Factory pattern for indicator creation, keyed by the persisted kind tag
"""

from collections.abc import Mapping
from typing import Any

from core.errors import InvalidParameterError, ParameterErrorReason
from domain.indicators import params as codec
from domain.indicators.base import BaseIndicator
from domain.indicators.moving_averages import SMA, WMA
from domain.indicators.statistics import MAX, MIN, STDDEV, SUM


class IndicatorRegistry:
    """
    Registry for indicator creation

    Provides factory methods for creating indicators
    """

    # Registry of available indicators (lowercase kind -> class)
    _indicators: dict[str, type[BaseIndicator]] = {
        "sma": SMA,
        "wma": WMA,
        "sum": SUM,
        "max": MAX,
        "min": MIN,
        "stddev": STDDEV,
    }

    @classmethod
    def get(cls, indicator_type: str) -> type[BaseIndicator]:
        """
        Look up an indicator class by kind (case-insensitive)

        Raises:
            InvalidParameterError: UNKNOWN_KIND if the kind is not registered
        """
        indicator_class = cls._indicators.get(str(indicator_type).lower())
        if not indicator_class:
            available = ", ".join(cls.list_indicators())
            raise InvalidParameterError(
                ParameterErrorReason.UNKNOWN_KIND,
                f"Unknown indicator: {indicator_type}. Available: {available}",
            )
        return indicator_class

    @classmethod
    def create(cls, indicator_type: str, **params) -> BaseIndicator:
        """
        Create indicator by type

        Example:
            >>> sma = IndicatorRegistry.create("sma", period=20)
            >>> sma.parameter_identity
            '{"period":20}'
        """
        return cls.get(indicator_type)(**params)

    @classmethod
    def resolve(
        cls,
        indicator_type: str,
        params: Mapping[str, Any],
        max_period: int = codec.MAX_PERIOD,
    ) -> BaseIndicator:
        """
        Validate a raw parameter mapping and create the indicator

        Raises:
            InvalidParameterError: Unknown kind or invalid params
        """
        indicator_class = cls.get(indicator_type)
        normalized = codec.validate(params, max_period)
        return indicator_class(**normalized, max_period=max_period)

    @classmethod
    def register(cls, name: str, indicator_class: type[BaseIndicator]) -> None:
        """
        Register a new indicator

        Example:
            >>> class Midpoint(BaseIndicator):
            ...     kind = "MIDPOINT"
            ...     def aggregate(self, windows):
            ...         return (windows.max(axis=1) + windows.min(axis=1)) / 2
            >>> IndicatorRegistry.register("midpoint", Midpoint)
        """
        cls._indicators[name.lower()] = indicator_class

    @classmethod
    def list_indicators(cls) -> list[str]:
        """
        List all available indicators

        Example:
            >>> IndicatorRegistry.list_indicators()
            ['max', 'min', 'sma', 'stddev', 'sum', 'wma']
        """
        return sorted(cls._indicators.keys())
