"""
Pytest configuration for integration tests

Integration tests talk to the Docker PostgreSQL instance from the host
machine. Docker exposes 5433→5432 on the host, so the default DSN points at
localhost:5433; override with INTEGRATION_POSTGRES_URL.

Tests are skipped when the database is not reachable.
"""

import os

import psycopg2
import pytest
from psycopg2.pool import ThreadedConnectionPool

from config.settings import get_settings
from providers.postgres.indicator_store import PostgresIndicatorStore


def _integration_dsn() -> str:
    settings = get_settings()
    return os.environ.get(
        "INTEGRATION_POSTGRES_URL",
        f"postgresql://{settings.POSTGRES_USER}:{settings.POSTGRES_PASSWORD}"
        f"@localhost:5433/{settings.POSTGRES_DB}",
    )


@pytest.fixture(scope="module")
def postgres_pool():
    """Connection pool against the Docker PostgreSQL instance"""
    try:
        pool = ThreadedConnectionPool(1, 4, _integration_dsn())
    except psycopg2.OperationalError as e:
        pytest.skip(f"PostgreSQL not available: {e}")

    yield pool
    pool.closeall()


@pytest.fixture
async def postgres_store(postgres_pool):
    """Indicator store on a clean indicators table"""
    store = PostgresIndicatorStore(postgres_pool, chunk_size=100)
    await store.ensure_schema()

    conn = postgres_pool.getconn()
    try:
        with conn, conn.cursor() as cur:
            cur.execute("TRUNCATE TABLE indicators")
    finally:
        postgres_pool.putconn(conn)

    return store
