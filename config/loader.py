"""
Scheduled job configuration with YAML support and Pydantic validation
"""

import logging
from typing import Any

from pydantic import BaseModel, Field, field_validator

from config.settings import get_settings
from domain.indicators.registry import IndicatorRegistry

logger = logging.getLogger(__name__)


class IndicatorConfig(BaseModel):
    """One indicator configuration (kind + parameters)"""

    kind: str
    params: dict[str, Any] = Field(default_factory=dict)

    @field_validator("kind")
    @classmethod
    def kind_registered(cls, v):
        # Raises InvalidParameterError (a ValueError) for unknown kinds
        return IndicatorRegistry.get(v).kind


class IndicatorJobConfig(BaseModel):
    """Indicators to recompute for one symbol across timeframes"""

    symbol: str
    timeframes: list[str]
    indicators: list[IndicatorConfig]

    @field_validator("timeframes")
    @classmethod
    def timeframes_not_empty(cls, v):
        if not v:
            raise ValueError("Timeframes list cannot be empty")
        return v

    @field_validator("indicators")
    @classmethod
    def indicators_not_empty(cls, v):
        if not v:
            raise ValueError("Indicators list cannot be empty")
        return v


class ScheduledTask(BaseModel):
    """One (symbol, timeframe, indicator) recompute unit"""

    symbol: str
    timeframe: str
    kind: str
    params: dict[str, Any]

    @property
    def label(self) -> str:
        params_str = ",".join(f"{k}={v}" for k, v in sorted(self.params.items()))
        return f"{self.kind}({params_str}) {self.symbol}/{self.timeframe}"


def load_indicator_jobs(raw_jobs: list[dict] | None = None) -> list[IndicatorJobConfig]:
    """
    Load and validate scheduled jobs

    Args:
        raw_jobs: Job dicts; defaults to settings.INDICATOR_JOBS (indicators.yaml)

    Raises:
        ValidationError: If any job is invalid

    Example:
        >>> jobs = load_indicator_jobs()
        >>> jobs[0].symbol
        'BTCUSDT'
    """
    if raw_jobs is None:
        raw_jobs = get_settings().INDICATOR_JOBS

    try:
        jobs = [IndicatorJobConfig(**job) for job in raw_jobs]
    except Exception as e:
        logger.error(f"Failed to load indicator jobs: {e}")
        raise

    logger.info(f"✓ Loaded {len(jobs)} indicator jobs")
    return jobs


def expand_tasks(jobs: list[IndicatorJobConfig]) -> list[ScheduledTask]:
    """
    Flatten jobs into (symbol, timeframe, indicator) tasks

    Example:
        >>> job = IndicatorJobConfig(
        ...     symbol="BTCUSDT",
        ...     timeframes=["1m", "5m"],
        ...     indicators=[{"kind": "sma", "params": {"period": 20}}],
        ... )
        >>> [t.label for t in expand_tasks([job])]
        ['SMA(period=20) BTCUSDT/1m', 'SMA(period=20) BTCUSDT/5m']
    """
    return [
        ScheduledTask(
            symbol=job.symbol,
            timeframe=timeframe,
            kind=indicator.kind,
            params=indicator.params,
        )
        for job in jobs
        for timeframe in job.timeframes
        for indicator in job.indicators
    ]


# Convenience exports
__all__ = [
    "IndicatorConfig",
    "IndicatorJobConfig",
    "ScheduledTask",
    "load_indicator_jobs",
    "expand_tasks",
]
