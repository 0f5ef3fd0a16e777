"""
Indicator models

- SeriesKey: identifies one computed indicator stream
- IndicatorRecord: one persisted indicator value (natural-key addressed)
- IndicatorPoint: (timestamp, value) pair returned to callers
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class SeriesKey(BaseModel):
    """
    (symbol, timeframe, indicator kind, parameter identity)

    The parameter identity is the canonical string produced by
    domain.indicators.params.canonicalize().
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    timeframe: str
    indicator_kind: str
    parameter_identity: str

    @property
    def cache_key(self) -> str:
        """Cache key for this series, e.g. indicators:SMA:BTCUSDT:1m:{"period":20}"""
        return (
            f"indicators:{self.indicator_kind}:{self.symbol}:"
            f"{self.timeframe}:{self.parameter_identity}"
        )


class IndicatorPoint(BaseModel):
    """One output of the window calculator"""

    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    value: float


class IndicatorRecord(BaseModel):
    """
    Persisted indicator value

    Natural key: (symbol, timeframe, timestamp, indicator_kind, parameter_identity).
    created_at/updated_at are assigned by the store.
    """

    symbol: str
    timeframe: str
    timestamp: datetime
    indicator_kind: str = Field(description="Indicator tag (SMA, WMA, ...)")
    parameter_identity: str = Field(description='Canonical parameters, e.g. {"period":20}')
    value: float
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def natural_key(self) -> tuple[str, str, datetime, str, str]:
        return (
            self.symbol,
            self.timeframe,
            self.timestamp,
            self.indicator_kind,
            self.parameter_identity,
        )

    @property
    def series_key(self) -> SeriesKey:
        return SeriesKey(
            symbol=self.symbol,
            timeframe=self.timeframe,
            indicator_kind=self.indicator_kind,
            parameter_identity=self.parameter_identity,
        )

    def to_point(self) -> IndicatorPoint:
        return IndicatorPoint(timestamp=self.timestamp, value=self.value)

    def to_row(self) -> tuple:
        """Row tuple for database insertion (natural key + value)"""
        return (*self.natural_key, self.value)
