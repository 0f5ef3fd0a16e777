"""
Unit tests for scheduled job configuration
"""

import pytest
from pydantic import ValidationError

from config.loader import IndicatorJobConfig, ScheduledTask, expand_tasks, load_indicator_jobs


@pytest.mark.unit
class TestLoadIndicatorJobs:
    """YAML jobs → validated models"""

    def test_load_from_yaml(self):
        jobs = load_indicator_jobs()

        assert [job.symbol for job in jobs] == ["BTCUSDT", "ETHUSDT"]
        assert jobs[0].timeframes == ["1m", "5m", "1h"]
        assert jobs[0].indicators[0].kind == "SMA"
        assert jobs[0].indicators[0].params == {"period": 20}

    def test_kind_is_normalized(self):
        jobs = load_indicator_jobs(
            [{"symbol": "BTCUSDT", "timeframes": ["1m"], "indicators": [{"kind": "wma"}]}]
        )

        assert jobs[0].indicators[0].kind == "WMA"

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError, match="Unknown indicator"):
            load_indicator_jobs(
                [{"symbol": "BTCUSDT", "timeframes": ["1m"], "indicators": [{"kind": "rsi"}]}]
            )

    def test_empty_timeframes_rejected(self):
        with pytest.raises(ValidationError, match="Timeframes list cannot be empty"):
            IndicatorJobConfig(
                symbol="BTCUSDT",
                timeframes=[],
                indicators=[{"kind": "sma", "params": {"period": 20}}],
            )

    def test_empty_indicators_rejected(self):
        with pytest.raises(ValidationError, match="Indicators list cannot be empty"):
            IndicatorJobConfig(symbol="BTCUSDT", timeframes=["1m"], indicators=[])


@pytest.mark.unit
class TestExpandTasks:
    """Jobs → (symbol, timeframe, indicator) tasks"""

    def test_cartesian_expansion(self):
        tasks = expand_tasks(load_indicator_jobs())

        # BTCUSDT: 3 timeframes x 4 indicators, ETHUSDT: 2 x 4
        assert len(tasks) == 20
        assert all(isinstance(t, ScheduledTask) for t in tasks)

    def test_labels(self):
        job = IndicatorJobConfig(
            symbol="BTCUSDT",
            timeframes=["1m", "5m"],
            indicators=[{"kind": "sma", "params": {"period": 20}}],
        )

        assert [t.label for t in expand_tasks([job])] == [
            "SMA(period=20) BTCUSDT/1m",
            "SMA(period=20) BTCUSDT/5m",
        ]
