"""
ClickHouse implementation of the market data provider

Reads OHLCV candles from the columnar candle table
"""

import asyncio
import logging
from datetime import datetime
from decimal import Decimal

from clickhouse_driver import Client

from config.settings import get_settings
from core.interfaces.market_data import DEFAULT_FETCH_LIMIT, BaseMarketDataProvider
from core.models.market_data import Candle
from core.validators.market_data import normalize_candles

logger = logging.getLogger(__name__)

CANDLE_COLUMNS = "timestamp, symbol, timeframe, open, high, low, close, volume, trades_count"


class ClickHouseCandleProvider(BaseMarketDataProvider):
    """
    ClickHouse candle source

    Features:
    - FINAL reads collapse ReplacingMergeTree duplicates
    - Most recent `limit` candles within bounds, returned ascending
    """

    def __init__(self, client: Client | None = None, table: str | None = None):
        """
        Args:
            client: Connected clickhouse_driver Client (optional; built in connect())
            table: Fully qualified candles table (default from settings)
        """
        self.settings = get_settings()
        self.client = client
        self.table = table or self.settings.CLICKHOUSE_CANDLES_TABLE

    async def connect(self) -> None:
        """Establish connection to ClickHouse"""
        if self.client is not None:
            return

        try:
            self.client = Client(
                host=self.settings.CLICKHOUSE_HOST,
                port=self.settings.CLICKHOUSE_PORT,
                database=self.settings.CLICKHOUSE_DB,
                user=self.settings.CLICKHOUSE_USER,
                password=self.settings.CLICKHOUSE_PASSWORD,
            )
            # Test connection
            await asyncio.to_thread(self.client.execute, "SELECT 1")
            logger.info(
                f"✓ Connected to ClickHouse: "
                f"{self.settings.CLICKHOUSE_HOST}:{self.settings.CLICKHOUSE_PORT}"
            )
        except Exception as e:
            logger.error(f"✗ Failed to connect to ClickHouse: {e}")
            raise

    def build_query(self, has_start: bool, has_end: bool) -> str:
        conditions = ["symbol = %(symbol)s", "timeframe = %(timeframe)s"]
        if has_start:
            conditions.append("timestamp >= %(start_time)s")
        if has_end:
            conditions.append("timestamp <= %(end_time)s")

        return f"""
            SELECT {CANDLE_COLUMNS}
            FROM {self.table} FINAL
            WHERE {" AND ".join(conditions)}
            ORDER BY timestamp DESC
            LIMIT %(limit)s
        """

    async def fetch(
        self,
        symbol: str,
        timeframe: str,
        start_time: datetime | None = None,
        end_time: datetime | None = None,
        limit: int = DEFAULT_FETCH_LIMIT,
    ) -> list[Candle]:
        """
        Fetch candles, newest `limit` within bounds, ascending

        Raises:
            RuntimeError: If not connected
        """
        if not self.client:
            raise RuntimeError("ClickHouse client not connected")

        query = self.build_query(start_time is not None, end_time is not None)
        params = {
            "symbol": symbol,
            "timeframe": timeframe,
            "start_time": start_time,
            "end_time": end_time,
            "limit": limit,
        }

        try:
            rows = await asyncio.to_thread(self.client.execute, query, params)
        except Exception as e:
            logger.error(f"✗ ClickHouse candle query error for {symbol}/{timeframe}: {e}")
            raise

        candles = [
            Candle(
                timestamp=ts,
                symbol=sym,
                timeframe=tf,
                open=Decimal(str(open_)),
                high=Decimal(str(high)),
                low=Decimal(str(low)),
                close=Decimal(str(close)),
                volume=Decimal(str(volume)),
                trades_count=trades_count,
            )
            for ts, sym, tf, open_, high, low, close, volume, trades_count in rows
        ]

        logger.debug(f"Fetched {len(candles)} candles for {symbol}/{timeframe}")
        return normalize_candles(candles)

    async def close(self) -> None:
        """Close connection"""
        if self.client:
            self.client.disconnect()
            logger.info("✓ ClickHouse connection closed")
