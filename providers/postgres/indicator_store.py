"""
PostgreSQL implementation of the indicator store

Idempotent persistence via native upsert:
    INSERT ... ON CONFLICT (natural key) DO UPDATE SET value, updated_at

Connections are borrowed from a psycopg2 pool per operation and returned
afterwards. Blocking driver calls run in a worker thread, bounded by a
timeout that surfaces as StoreUnavailableError.
"""

import asyncio
import logging
from collections.abc import Callable, Iterable, Iterator
from contextlib import contextmanager
from datetime import datetime
from typing import Any

import psycopg2
from psycopg2.extras import execute_values
from psycopg2.pool import AbstractConnectionPool, ThreadedConnectionPool

from core.errors import StoreUnavailableError
from core.interfaces.indicator_store import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_LATEST_COUNT,
    DEFAULT_QUERY_LIMIT,
    BaseIndicatorStore,
    chunked,
    dedupe_records,
)
from core.models.indicators import IndicatorRecord, SeriesKey
from providers.postgres import schema

logger = logging.getLogger(__name__)


class PostgresIndicatorStore(BaseIndicatorStore):
    """
    PostgreSQL indicator store

    Features:
    - Natural-key upsert (unique index, ON CONFLICT)
    - Chunked batch writes, one transaction per chunk
    - Per-operation connection borrowing from an injected pool
    """

    def __init__(
        self,
        pool: AbstractConnectionPool | None = None,
        *,
        dsn: str | None = None,
        min_connections: int = 1,
        max_connections: int = 5,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        timeout_seconds: float = 10.0,
    ):
        """
        Args:
            pool: Ready connection pool (takes precedence over dsn)
            dsn: Connection string used by connect() when no pool is given
            min_connections: Pool lower bound when created from dsn
            max_connections: Pool upper bound when created from dsn
            chunk_size: Records per INSERT statement
            timeout_seconds: Bound on each backend round-trip
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")

        self._pool = pool
        self.dsn = dsn
        self.min_connections = min_connections
        self.max_connections = max_connections
        self.chunk_size = chunk_size
        self.timeout_seconds = timeout_seconds

    async def connect(self) -> None:
        """Create the connection pool from dsn (no-op if a pool was injected)"""
        if self._pool is not None:
            return
        if not self.dsn:
            raise StoreUnavailableError("No connection pool or DSN configured")

        try:
            self._pool = await asyncio.to_thread(
                ThreadedConnectionPool, self.min_connections, self.max_connections, self.dsn
            )
            logger.info(f"✓ Connected to PostgreSQL indicator store (pool {self.max_connections})")
        except psycopg2.Error as e:
            logger.error(f"✗ Failed to connect to PostgreSQL: {e}")
            raise StoreUnavailableError(f"Cannot connect to indicator store: {e}") from e

    async def close(self) -> None:
        """Close all pooled connections"""
        if self._pool is not None:
            self._pool.closeall()
            self._pool = None
            logger.info("✓ PostgreSQL indicator store closed")

    @contextmanager
    def _borrow(self) -> Iterator[Any]:
        """Borrow one connection; any driver error becomes StoreUnavailableError"""
        if self._pool is None:
            raise StoreUnavailableError("Indicator store not connected")

        try:
            conn = self._pool.getconn()
        except psycopg2.Error as e:
            logger.error(f"✗ Cannot obtain PostgreSQL connection: {e}")
            raise StoreUnavailableError(f"Cannot obtain connection: {e}") from e

        try:
            yield conn
        except psycopg2.Error as e:
            logger.error(f"✗ PostgreSQL indicator store error: {e}")
            raise StoreUnavailableError(f"Indicator store error: {e}") from e
        finally:
            self._pool.putconn(conn, close=bool(conn.closed))

    async def _run(self, fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return await asyncio.wait_for(asyncio.to_thread(fn, *args), self.timeout_seconds)
        except TimeoutError as e:
            logger.error(f"✗ Indicator store timed out after {self.timeout_seconds}s")
            raise StoreUnavailableError(
                f"Indicator store timed out after {self.timeout_seconds}s"
            ) from e

    # ============================================
    # SCHEMA
    # ============================================
    def _ensure_schema_sync(self) -> None:
        with self._borrow() as conn:
            with conn, conn.cursor() as cur:
                cur.execute(schema.DDL)

    async def ensure_schema(self) -> None:
        """Create the indicators table and indexes if missing (idempotent)"""
        await self._run(self._ensure_schema_sync)
        logger.info("✓ Indicator schema ensured")

    # ============================================
    # WRITES
    # ============================================
    def _upsert_sync(self, records: list[IndicatorRecord]) -> int:
        written = 0
        with self._borrow() as conn:
            for chunk in chunked(records, self.chunk_size):
                # Each chunk commits on its own
                with conn, conn.cursor() as cur:
                    execute_values(
                        cur,
                        schema.UPSERT_SQL,
                        [record.to_row() for record in chunk],
                        page_size=len(chunk),
                    )
                written += len(chunk)
                logger.debug(f"Upserted chunk of {len(chunk)} ({written}/{len(records)})")
        return written

    async def upsert(self, records: Iterable[IndicatorRecord]) -> int:
        """
        Batch upsert records, chunk by chunk

        Duplicate natural keys within the batch collapse to the last record,
        since one INSERT ... ON CONFLICT cannot touch a row twice.

        Raises:
            StoreUnavailableError: Connection/query failure or timeout.
                Chunks committed before the failure stay committed; retrying
                the whole batch is safe.
        """
        batch = dedupe_records(records)
        if not batch:
            return 0

        written = await self._run(self._upsert_sync, batch)
        logger.debug(f"✓ Upserted {written} indicator records")
        return written

    def _purge_sync(self, series_key: SeriesKey) -> int:
        with self._borrow() as conn:
            with conn, conn.cursor() as cur:
                cur.execute(schema.DELETE_SERIES_SQL, series_key.model_dump())
                return cur.rowcount

    async def purge_series(self, series_key: SeriesKey) -> int:
        deleted = await self._run(self._purge_sync, series_key)
        logger.info(f"✓ Purged {deleted} rows for {series_key.cache_key}")
        return deleted

    # ============================================
    # READS
    # ============================================
    def _select_sync(self, sql: str, params: dict[str, Any]) -> list[IndicatorRecord]:
        with self._borrow() as conn:
            with conn, conn.cursor() as cur:
                cur.execute(sql, params)
                rows = cur.fetchall()
        return [self._row_to_record(row) for row in rows]

    async def query_range(
        self,
        series_key: SeriesKey,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        limit: int = DEFAULT_QUERY_LIMIT,
    ) -> list[IndicatorRecord]:
        sql = schema.select_range_sql(start_time is not None, end_time is not None)
        params = {
            **series_key.model_dump(),
            "start_time": start_time,
            "end_time": end_time,
            "limit": limit,
        }
        return await self._run(self._select_sync, sql, params)

    async def query_latest(
        self, series_key: SeriesKey, count: int = DEFAULT_LATEST_COUNT
    ) -> list[IndicatorRecord]:
        params = {**series_key.model_dump(), "limit": count}
        records = await self._run(self._select_sync, schema.SELECT_LATEST_SQL, params)
        records.reverse()  # chronological order
        return records

    @staticmethod
    def _row_to_record(row: tuple) -> IndicatorRecord:
        symbol, timeframe, ts, kind, identity, value, created_at, updated_at = row
        return IndicatorRecord(
            symbol=symbol,
            timeframe=timeframe,
            timestamp=ts,
            indicator_kind=kind,
            parameter_identity=identity,
            value=float(value),
            created_at=created_at,
            updated_at=updated_at,
        )
