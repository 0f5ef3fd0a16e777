"""
Unit tests for candle sequence validation
"""

import pytest

from core.validators import is_ordered, normalize_candles


@pytest.mark.unit
class TestNormalizeCandles:
    """Ordering contract enforced before windowing"""

    def test_sorts_ascending(self, candle_builder):
        candles = [candle_builder(3, 2), candle_builder(1, 0), candle_builder(2, 1)]

        result = normalize_candles(candles)

        assert [c.price() for c in result] == [1.0, 2.0, 3.0]
        assert is_ordered(result)

    def test_duplicate_timestamp_last_wins(self, candle_builder):
        original = candle_builder(100, 1)
        corrected = candle_builder(101, 1)

        result = normalize_candles([candle_builder(99, 0), original, corrected])

        assert len(result) == 2
        assert result[-1].price() == 101.0

    def test_empty(self):
        assert normalize_candles([]) == []

    def test_mixed_partitions_rejected(self, candle_builder):
        candles = [
            candle_builder(1, 0, symbol="BTCUSDT"),
            candle_builder(1, 1, symbol="ETHUSDT"),
        ]

        with pytest.raises(ValueError, match="multiple partitions"):
            normalize_candles(candles)


@pytest.mark.unit
class TestIsOrdered:
    def test_strictly_ascending(self, candle_factory):
        assert is_ordered(candle_factory([1, 2, 3]))

    def test_duplicates_not_ordered(self, candle_builder):
        assert not is_ordered([candle_builder(1, 0), candle_builder(2, 0)])

    def test_descending_not_ordered(self, candle_builder):
        assert not is_ordered([candle_builder(1, 1), candle_builder(2, 0)])

    def test_trivial_sequences(self, candle_builder):
        assert is_ordered([])
        assert is_ordered([candle_builder(1, 0)])
