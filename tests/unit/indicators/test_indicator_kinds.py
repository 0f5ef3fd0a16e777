"""
Unit tests for indicator kinds and the registry

Tests with hand-calculated values for each kind
"""

import numpy as np
import pytest

from core.errors import InsufficientDataError, InvalidParameterError, ParameterErrorReason
from domain.indicators import MAX, MIN, SMA, STDDEV, SUM, WMA, BaseIndicator, IndicatorRegistry


@pytest.mark.unit
class TestMovingAverages:
    """SMA / WMA over closes"""

    def test_sma_hand_calculated(self, candle_factory):
        prices = [100, 102, 101, 103, 105, 107, 106, 108, 110, 109]
        candles = candle_factory(prices)

        points = SMA(period=3).compute_series(candles)

        assert len(points) == 8
        # (110 + 109 + 108) / 3
        assert points[-1].value == pytest.approx(109.0)
        assert points[-1].timestamp == candles[-1].timestamp

    def test_wma_weights_newest_heaviest(self, candle_factory):
        candles = candle_factory([10, 20, 30])

        points = WMA(period=3).compute_series(candles)

        # (10*1 + 20*2 + 30*3) / 6
        assert points[0].value == pytest.approx(140 / 6)

    def test_wma_above_sma_in_uptrend(self, candle_factory):
        candles = candle_factory([100 + i for i in range(10)])

        wma = WMA(period=5).compute_series(candles)[-1].value
        sma = SMA(period=5).compute_series(candles)[-1].value

        assert wma > sma

    def test_insufficient_candles(self, candle_factory):
        with pytest.raises(InsufficientDataError):
            SMA(period=20).compute_series(candle_factory([100] * 10))


@pytest.mark.unit
class TestStatistics:
    """SUM / MAX / MIN / STDDEV"""

    def test_sum(self, candle_factory):
        points = SUM(period=2).compute_series(candle_factory([1, 2, 3]))

        assert [p.value for p in points] == [3.0, 5.0]

    def test_max_uses_highs(self, candle_builder):
        candles = [
            candle_builder(100, 0, high=101),
            candle_builder(100, 1, high=109),
            candle_builder(100, 2, high=104),
        ]

        assert MAX(period=2).compute_series(candles)[-1].value == 109.0

    def test_min_uses_lows(self, candle_builder):
        candles = [
            candle_builder(100, 0, low=95),
            candle_builder(100, 1, low=98),
            candle_builder(100, 2, low=97),
        ]

        assert [p.value for p in MIN(period=2).compute_series(candles)] == [95.0, 97.0]

    def test_stddev(self, candle_factory):
        candles = candle_factory([2, 4, 4, 4, 5, 5, 7, 9])

        assert STDDEV(period=8).compute_series(candles)[0].value == pytest.approx(2.0)

    def test_compute_single_matches_series(self, candle_factory):
        closes = [100 + (i % 7) * 1.5 for i in range(40)]
        candles = candle_factory(closes)

        for indicator_class in (SMA, WMA, SUM, STDDEV):
            indicator = indicator_class(period=10)
            series = indicator.compute_series(candles)
            single = indicator.compute_single(closes[-10:])
            assert single == series[-1].value, indicator_class.kind


@pytest.mark.unit
class TestIndicatorIdentity:
    """kind + parameter identity"""

    def test_parameter_identity(self):
        assert SMA(period=20).parameter_identity == '{"period":20}'

    def test_repr(self):
        assert repr(WMA(period=14)) == "WMA(period=14)"

    def test_invalid_period_rejected_on_construction(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            SMA(period=0)

        assert exc_info.value.reason == ParameterErrorReason.NOT_POSITIVE


@pytest.mark.unit
class TestIndicatorRegistry:
    """Registry lookup and creation"""

    def test_lookup_is_case_insensitive(self):
        assert IndicatorRegistry.get("sma") is SMA
        assert IndicatorRegistry.get("SMA") is SMA
        assert IndicatorRegistry.get("StdDev") is STDDEV

    def test_unknown_kind(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            IndicatorRegistry.get("rsi")

        assert exc_info.value.reason == ParameterErrorReason.UNKNOWN_KIND
        assert "Unknown indicator: rsi" in str(exc_info.value)

    def test_create(self):
        indicator = IndicatorRegistry.create("wma", period=10)

        assert isinstance(indicator, WMA)
        assert indicator.period == 10

    def test_resolve_normalizes_params(self):
        indicator = IndicatorRegistry.resolve("SMA", {"period": 20.0})

        assert indicator.period == 20
        assert indicator.parameter_identity == '{"period":20}'

    def test_resolve_enforces_ceiling(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            IndicatorRegistry.resolve("sma", {"period": 100}, max_period=50)

        assert exc_info.value.reason == ParameterErrorReason.TOO_LARGE

    def test_list_indicators(self):
        assert set(IndicatorRegistry.list_indicators()) >= {
            "max",
            "min",
            "sma",
            "stddev",
            "sum",
            "wma",
        }

    def test_register_custom_kind(self, candle_factory):
        class Midpoint(BaseIndicator):
            kind = "MIDPOINT"

            def aggregate(self, windows):
                return (windows.max(axis=1) + windows.min(axis=1)) / 2

        IndicatorRegistry.register("midpoint", Midpoint)
        try:
            indicator = IndicatorRegistry.resolve("midpoint", {"period": 3})
            points = indicator.compute_series(candle_factory([1, 5, 3]))
            assert points[0].value == 3.0
        finally:
            IndicatorRegistry._indicators.pop("midpoint")

    def test_aggregate_receives_one_row_per_window(self, candle_factory):
        seen = []

        class Recorder(BaseIndicator):
            kind = "RECORDER"

            def aggregate(self, windows):
                seen.append(windows.shape)
                return np.zeros(windows.shape[0])

        Recorder(period=4).compute_series(candle_factory(range(10)))

        assert seen == [(7, 4)]
