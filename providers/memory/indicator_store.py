"""
In-memory implementation of the indicator store

Same natural-key semantics as the PostgreSQL store, held in a dict.
Used for local runs (INDICATOR_STORE_BACKEND=memory) and tests.
"""

import logging
from collections.abc import Iterable
from datetime import UTC, datetime

from core.interfaces.indicator_store import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_LATEST_COUNT,
    DEFAULT_QUERY_LIMIT,
    BaseIndicatorStore,
    chunked,
    dedupe_records,
)
from core.models.indicators import IndicatorRecord, SeriesKey

logger = logging.getLogger(__name__)


class InMemoryIndicatorStore(BaseIndicatorStore):
    """Indicator store backed by a dict keyed on the natural key"""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.chunk_size = chunk_size
        self._rows: dict[tuple, IndicatorRecord] = {}

    def row_count(self) -> int:
        return len(self._rows)

    def snapshot(self) -> dict[tuple, float]:
        """Natural key -> value for every stored row"""
        return {key: record.value for key, record in self._rows.items()}

    async def upsert(self, records: Iterable[IndicatorRecord]) -> int:
        batch = dedupe_records(records)
        written = 0

        for chunk in chunked(batch, self.chunk_size):
            now = datetime.now(UTC)
            for record in chunk:
                existing = self._rows.get(record.natural_key)
                created_at = existing.created_at if existing else now
                self._rows[record.natural_key] = record.model_copy(
                    update={"created_at": created_at, "updated_at": now}
                )
            written += len(chunk)

        logger.debug(f"✓ Upserted {written} indicator records (memory)")
        return written

    def _series(self, series_key: SeriesKey) -> list[IndicatorRecord]:
        """Records of one series, newest first"""
        records = [r for r in self._rows.values() if r.series_key == series_key]
        return sorted(records, key=lambda r: r.timestamp, reverse=True)

    async def query_range(
        self,
        series_key: SeriesKey,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        limit: int = DEFAULT_QUERY_LIMIT,
    ) -> list[IndicatorRecord]:
        records = [
            r
            for r in self._series(series_key)
            if (start_time is None or r.timestamp >= start_time)
            and (end_time is None or r.timestamp <= end_time)
        ]
        return records[:limit]

    async def query_latest(
        self, series_key: SeriesKey, count: int = DEFAULT_LATEST_COUNT
    ) -> list[IndicatorRecord]:
        records = self._series(series_key)[:count]
        records.reverse()
        return records

    async def purge_series(self, series_key: SeriesKey) -> int:
        keys = [key for key, r in self._rows.items() if r.series_key == series_key]
        for key in keys:
            del self._rows[key]
        return len(keys)
