#!/usr/bin/env python3
"""
Create the PostgreSQL indicators table and its indexes

Idempotent (CREATE ... IF NOT EXISTS), safe to run on every deploy.

Usage:
    uv run python scripts/init_indicator_schema.py
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from config.settings import get_settings
from providers.postgres.indicator_store import PostgresIndicatorStore
from providers.postgres.schema import TABLE

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)


async def main():
    """Main entry point"""
    settings = get_settings()
    logger.info(
        f"Initializing {TABLE} on {settings.POSTGRES_HOST}:{settings.POSTGRES_PORT}"
        f"/{settings.POSTGRES_DB}..."
    )

    store = PostgresIndicatorStore(
        dsn=settings.postgres_dsn,
        min_connections=1,
        max_connections=1,
        timeout_seconds=settings.INDICATOR_STORE_TIMEOUT_SECONDS,
    )
    await store.connect()

    try:
        await store.ensure_schema()
        logger.info(f"✅ Table {TABLE} ready")
    finally:
        await store.close()


if __name__ == "__main__":
    asyncio.run(main())
