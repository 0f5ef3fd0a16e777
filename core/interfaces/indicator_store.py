from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import datetime

from core.models.indicators import IndicatorRecord, SeriesKey

DEFAULT_CHUNK_SIZE = 1000
DEFAULT_QUERY_LIMIT = 1000
DEFAULT_LATEST_COUNT = 100


def dedupe_records(records: Iterable[IndicatorRecord]) -> list[IndicatorRecord]:
    """Collapse records sharing a natural key (last one wins), keeping first-seen order"""
    by_key: dict[tuple, IndicatorRecord] = {}
    for record in records:
        by_key[record.natural_key] = record
    return list(by_key.values())


def chunked(records: list[IndicatorRecord], size: int) -> Iterable[list[IndicatorRecord]]:
    for start in range(0, len(records), size):
        yield records[start : start + size]


class BaseIndicatorStore(ABC):
    """
    Abstract interface for indicator persistence

    Records are addressed by their natural key
    (symbol, timeframe, timestamp, indicator_kind, parameter_identity),
    never by a surrogate id.

    Implementations:
    - PostgresIndicatorStore (providers/postgres/indicator_store.py)
    - InMemoryIndicatorStore (providers/memory/indicator_store.py)

    All operations raise StoreUnavailableError when the backend cannot be
    reached; callers may retry the whole call.
    """

    @abstractmethod
    async def upsert(self, records: Iterable[IndicatorRecord]) -> int:
        """
        Insert new natural keys, overwrite value/updated_at of existing ones

        created_at of an existing row is never changed. Safe to call
        repeatedly with overlapping or duplicate input.

        Returns:
            Number of distinct records written
        """

    @abstractmethod
    async def query_range(
        self,
        series_key: SeriesKey,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        limit: int = DEFAULT_QUERY_LIMIT,
    ) -> list[IndicatorRecord]:
        """
        Records of one series within inclusive time bounds

        Returns:
            Records ordered by timestamp DESC, at most `limit`
        """

    @abstractmethod
    async def query_latest(
        self, series_key: SeriesKey, count: int = DEFAULT_LATEST_COUNT
    ) -> list[IndicatorRecord]:
        """
        Most recent `count` records of one series

        Returns:
            Records ordered by timestamp ASC (chronological)
        """

    @abstractmethod
    async def purge_series(self, series_key: SeriesKey) -> int:
        """
        Delete every record of one series (all timestamps)

        Returns:
            Number of rows deleted
        """

    async def connect(self) -> None:
        """Acquire backend resources (no-op by default)"""

    async def close(self) -> None:
        """Release backend resources (no-op by default)"""
