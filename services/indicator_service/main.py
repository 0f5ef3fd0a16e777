"""
Indicator Service - Scheduled Recompute

Pattern:
- Scheduled job: every INDICATOR_SERVICE_INTERVAL_SECONDS (+ initial delay)
- Reads candles from ClickHouse (INDICATOR_CANDLE_LOOKBACK per job)
- Recomputes every configured (symbol, timeframe, indicator) series
- Upserts into the indicator store, publishes latest values to Redis

Recompute is idempotent: overlapping runs converge on the same rows.
"""

import asyncio
import logging
import os
import signal
import sys
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from config.loader import ScheduledTask, expand_tasks, load_indicator_jobs
from config.settings import get_settings
from core.errors import IndicatorError
from factory.client_factory import create_indicator_service
from services.indicator_service.service import IndicatorService

LOG_DIR = "data/logs"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO", log_dir: str = LOG_DIR) -> None:
    """Console handler + rotating error log (5MB x 3)"""
    os.makedirs(log_dir, exist_ok=True)

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(logging.Formatter(LOG_FORMAT))

    errors = RotatingFileHandler(
        os.path.join(log_dir, "indicator_service_errors.log"),
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
    )
    errors.setLevel(logging.ERROR)
    errors.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(level=level, handlers=[console, errors], force=True)


class IndicatorRunner:
    """
    Scheduled recompute loop over configured indicator jobs

    Flow per cycle:
    1. For each task: recompute_and_store(limit=INDICATOR_CANDLE_LOOKBACK)
    2. Log and skip failing tasks (one bad series never stops the cycle)
    3. Sleep until the next interval
    """

    def __init__(
        self,
        service: IndicatorService | None = None,
        tasks: list[ScheduledTask] | None = None,
    ):
        self.settings = get_settings()
        self.running = False

        logger.info("🔧 Initializing indicator service...")
        self.service = service or create_indicator_service()
        self.tasks = tasks if tasks is not None else expand_tasks(load_indicator_jobs())

    async def run_cycle(self) -> int:
        """
        Recompute every task once

        Returns:
            Number of tasks that succeeded
        """
        succeeded = 0
        lookback = self.settings.INDICATOR_CANDLE_LOOKBACK

        for task in self.tasks:
            try:
                await self.service.recompute_and_store(
                    symbol=task.symbol,
                    timeframe=task.timeframe,
                    kind=task.kind,
                    params=task.params,
                    limit=lookback,
                )
                succeeded += 1

            except IndicatorError as e:
                logger.warning(f"⚠️ Skipped {task.label}: {e}")
            except Exception as e:
                logger.error(f"Failed to process {task.label}: {e}")

        return succeeded

    async def connect(self) -> None:
        await self.service.provider.connect()
        logger.info("✅ Connected to market data provider")

        await self.service.store.connect()
        logger.info("✅ Connected to indicator store")

        if self.service.cache is not None:
            await self.service.cache.cache.connect()
            logger.info("✅ Connected to Redis")

    async def start(self):
        """Start the indicator service loop"""
        interval = self.settings.INDICATOR_SERVICE_INTERVAL_SECONDS
        initial_delay = self.settings.INDICATOR_SERVICE_INITIAL_DELAY_SECONDS

        logger.info("=" * 60)
        logger.info("Indicator Service started (scheduled mode)")
        logger.info("=" * 60)
        logger.info(f"  Interval: {interval}s (+ {initial_delay}s initial delay)")
        logger.info(f"  Tasks: {len(self.tasks)}")
        logger.info(f"  Lookback: {self.settings.INDICATOR_CANDLE_LOOKBACK} candles")
        logger.info("=" * 60)

        self.running = True

        try:
            await self.connect()

            logger.info(f"⏳ Initial {initial_delay}s delay...")
            await asyncio.sleep(initial_delay)

            while self.running:
                start_time = datetime.now(UTC)
                logger.info(f"=== Indicator recompute started at {start_time} ===")

                try:
                    succeeded = await self.run_cycle()
                except Exception as e:
                    logger.error(f"Error in recompute cycle: {e}", exc_info=True)
                    succeeded = 0

                elapsed = (datetime.now(UTC) - start_time).total_seconds()
                logger.info(
                    f"=== Recompute completed in {elapsed:.2f}s "
                    f"({succeeded}/{len(self.tasks)} tasks) ==="
                )

                sleep_time = max(0, interval - elapsed)
                if sleep_time > 0 and self.running:
                    logger.info(f"Sleeping {sleep_time:.1f}s until next recompute...")
                    await asyncio.sleep(sleep_time)

        except Exception as e:
            logger.error(f"❌ Fatal error: {e}", exc_info=True)
        finally:
            await self.stop()

    async def stop(self):
        """Graceful shutdown"""
        logger.info("🛑 Stopping Indicator Service...")
        self.running = False

        await self.service.provider.close()
        await self.service.store.close()
        if self.service.cache is not None:
            await self.service.cache.cache.close()

        logger.info("✅ Indicator Service stopped")


def signal_handler(runner):
    """Handle SIGINT/SIGTERM"""

    def handler(signum, frame):
        logger.info(f"Received signal {signum}")
        runner.running = False

    return handler


async def main():
    """Main entry point"""
    configure_logging(get_settings().LOG_LEVEL)
    runner = IndicatorRunner()

    signal.signal(signal.SIGINT, signal_handler(runner))
    signal.signal(signal.SIGTERM, signal_handler(runner))

    await runner.start()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Goodbye!")
