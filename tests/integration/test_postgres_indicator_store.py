"""
Integration tests for PostgresIndicatorStore (requires Docker PostgreSQL)

Tests natural-key upsert idempotency against the real unique index.
"""

from datetime import UTC, datetime, timedelta

import pytest

from core.models.indicators import IndicatorRecord, SeriesKey

T0 = datetime(2024, 1, 1, 9, 0, tzinfo=UTC)
SMA_20 = SeriesKey(
    symbol="BTCUSDT", timeframe="1m", indicator_kind="SMA", parameter_identity='{"period":20}'
)
SMA_50 = SMA_20.model_copy(update={"parameter_identity": '{"period":50}'})


def records(series_key, values, start_minute=0):
    return [
        IndicatorRecord(
            **series_key.model_dump(),
            timestamp=T0 + timedelta(minutes=start_minute + i),
            value=v,
        )
        for i, v in enumerate(values)
    ]


@pytest.mark.integration
class TestPostgresIndicatorStore:
    """Upsert / query / purge against PostgreSQL"""

    @pytest.mark.asyncio
    async def test_upsert_is_idempotent(self, postgres_store):
        batch = records(SMA_20, [100.0 + i for i in range(250)])

        assert await postgres_store.upsert(batch) == 250
        assert await postgres_store.upsert(batch) == 250

        stored = await postgres_store.query_range(SMA_20, limit=1000)
        assert len(stored) == 250

    @pytest.mark.asyncio
    async def test_update_keeps_created_at(self, postgres_store):
        await postgres_store.upsert(records(SMA_20, [1.0]))
        before = (await postgres_store.query_latest(SMA_20, 1))[0]

        await postgres_store.upsert(records(SMA_20, [2.0]))
        after = (await postgres_store.query_latest(SMA_20, 1))[0]

        assert after.value == 2.0
        assert after.created_at == before.created_at
        assert after.updated_at >= before.updated_at

    @pytest.mark.asyncio
    async def test_duplicate_keys_in_one_batch(self, postgres_store):
        batch = records(SMA_20, [1.0, 2.0]) + records(SMA_20, [9.0])

        assert await postgres_store.upsert(batch) == 2

        latest = await postgres_store.query_latest(SMA_20, 10)
        assert [r.value for r in latest] == [9.0, 2.0]

    @pytest.mark.asyncio
    async def test_range_and_latest_ordering(self, postgres_store):
        await postgres_store.upsert(records(SMA_20, [1.0, 2.0, 3.0, 4.0, 5.0]))

        ranged = await postgres_store.query_range(
            SMA_20, start_time=T0 + timedelta(minutes=1), end_time=T0 + timedelta(minutes=3)
        )
        latest = await postgres_store.query_latest(SMA_20, 2)

        assert [r.value for r in ranged] == [4.0, 3.0, 2.0]
        assert [r.value for r in latest] == [4.0, 5.0]

    @pytest.mark.asyncio
    async def test_purge_one_series(self, postgres_store):
        await postgres_store.upsert(records(SMA_20, [1.0, 2.0]))
        await postgres_store.upsert(records(SMA_50, [3.0]))

        assert await postgres_store.purge_series(SMA_20) == 2
        assert await postgres_store.query_latest(SMA_20) == []
        assert len(await postgres_store.query_latest(SMA_50)) == 1
