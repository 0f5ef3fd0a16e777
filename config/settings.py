"""
Application Settings - Load from YAML configs + .env secrets

Design Philosophy:
- Service configs (host, port, tables, engine knobs) → YAML files (public, versioned in git)
- Secrets (passwords) → .env file (gitignored)

Uses Pydantic for validation and type safety
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.utils.config import load_yaml_safe

PROVIDERS_DIR = Path(__file__).parent / "providers"


class Settings(BaseSettings):
    """
    Application settings

    Architecture:
    - Infrastructure configs → config/providers/*.yaml (public)
    - Secrets → .env (gitignored)

    Usage:
        from config.settings import get_settings

        settings = get_settings()
        print(settings.INDICATOR_UPSERT_CHUNK_SIZE)  # From indicators.yaml
        print(settings.POSTGRES_PASSWORD)  # From .env
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # Ignore extra fields in .env
    )

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Load YAML configs from files (cached at class level)
        if not hasattr(Settings, "_yaml_loaded"):
            Settings._database_config = load_yaml_safe(PROVIDERS_DIR / "databases.yaml")
            Settings._indicators_config = load_yaml_safe(PROVIDERS_DIR / "indicators.yaml")
            Settings._yaml_loaded = True

    # ============================================
    # ENVIRONMENT (.env only)
    # ============================================
    ENVIRONMENT: str = Field(default="local", description="Environment: local, dev, staging, prod")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # ============================================
    # INDICATOR STORE BACKEND (.env only)
    # ============================================
    INDICATOR_STORE_BACKEND: str = Field(
        default="postgres",
        description="Indicator store: postgres, memory",
    )

    # ============================================
    # CLICKHOUSE - candle source (from YAML + .env)
    # ============================================
    @property
    def CLICKHOUSE_HOST(self) -> str:
        """ClickHouse host from databases.yaml"""
        return self._database_config.get("clickhouse", {}).get("host", "clickhouse")

    @property
    def CLICKHOUSE_PORT(self) -> int:
        """ClickHouse native port from databases.yaml"""
        return self._database_config.get("clickhouse", {}).get("port", 9000)

    @property
    def CLICKHOUSE_DB(self) -> str:
        """ClickHouse database from databases.yaml"""
        return self._database_config.get("clickhouse", {}).get("database", "trading")

    @property
    def CLICKHOUSE_USER(self) -> str:
        """ClickHouse user from databases.yaml"""
        return self._database_config.get("clickhouse", {}).get("user", "trading_user")

    @property
    def CLICKHOUSE_CANDLES_TABLE(self) -> str:
        """Fully qualified candles table from databases.yaml"""
        return self._database_config.get("clickhouse", {}).get("candles_table", "trading.candles")

    # ClickHouse password from .env (secret)
    CLICKHOUSE_PASSWORD: str = Field(default="trading_pass")

    # ============================================
    # REDIS (from YAML + .env)
    # ============================================
    @property
    def REDIS_HOST(self) -> str:
        """Redis host from databases.yaml"""
        return self._database_config.get("redis", {}).get("host", "redis")

    @property
    def REDIS_PORT(self) -> int:
        """Redis port from databases.yaml"""
        return self._database_config.get("redis", {}).get("port", 6379)

    @property
    def REDIS_DB(self) -> int:
        """Redis database from databases.yaml"""
        return self._database_config.get("redis", {}).get("db", 0)

    # Redis password from .env (optional secret)
    REDIS_PASSWORD: str | None = Field(default=None)

    @property
    def redis_url(self) -> str:
        """Redis connection URL"""
        if self.REDIS_PASSWORD:
            return f"redis://:{self.REDIS_PASSWORD}@{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    # ============================================
    # POSTGRESQL - indicator store (from YAML + .env)
    # ============================================
    @property
    def POSTGRES_HOST(self) -> str:
        """PostgreSQL host from databases.yaml"""
        return self._database_config.get("postgres", {}).get("host", "postgres")

    @property
    def POSTGRES_PORT(self) -> int:
        """PostgreSQL port from databases.yaml"""
        return self._database_config.get("postgres", {}).get("port", 5432)

    @property
    def POSTGRES_DB(self) -> str:
        """PostgreSQL database from databases.yaml"""
        return self._database_config.get("postgres", {}).get("database", "trading")

    @property
    def POSTGRES_USER(self) -> str:
        """PostgreSQL user from databases.yaml"""
        return self._database_config.get("postgres", {}).get("user", "trading_user")

    @property
    def POSTGRES_POOL_MIN(self) -> int:
        """Minimum pooled connections from databases.yaml"""
        return self._database_config.get("postgres", {}).get("pool_min", 1)

    @property
    def POSTGRES_POOL_MAX(self) -> int:
        """Maximum pooled connections from databases.yaml"""
        return self._database_config.get("postgres", {}).get("pool_max", 5)

    # PostgreSQL password from .env (secret)
    POSTGRES_PASSWORD: str = Field(default="trading_pass")

    # Optional override
    POSTGRES_URL: str | None = Field(default=None)

    @property
    def postgres_dsn(self) -> str:
        """PostgreSQL connection string"""
        if self.POSTGRES_URL:
            return self.POSTGRES_URL
        return (
            f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )

    # ============================================
    # INDICATOR ENGINE (from YAML)
    # ============================================
    @property
    def INDICATOR_MAX_PERIOD(self) -> int:
        """Largest accepted window length"""
        return self._indicators_config.get("settings", {}).get("max_period", 500)

    @property
    def INDICATOR_UPSERT_CHUNK_SIZE(self) -> int:
        """Records per upsert statement"""
        return self._indicators_config.get("settings", {}).get("upsert_chunk_size", 1000)

    @property
    def INDICATOR_QUERY_LIMIT(self) -> int:
        """Default row cap for range queries"""
        return self._indicators_config.get("settings", {}).get("query_limit", 1000)

    @property
    def INDICATOR_FETCH_LIMIT(self) -> int:
        """Default candle count for recompute when no limit is given"""
        return self._indicators_config.get("settings", {}).get("fetch_limit", 5000)

    @property
    def INDICATOR_SERIES_COUNT(self) -> int:
        """Default number of points returned by series reads"""
        return self._indicators_config.get("settings", {}).get("series_count", 100)

    @property
    def INDICATOR_STORE_TIMEOUT_SECONDS(self) -> float:
        """Timeout around each store round-trip"""
        return self._indicators_config.get("settings", {}).get("store_timeout_seconds", 10.0)

    @property
    def INDICATOR_CACHE_ENABLED(self) -> bool:
        """Whether latest values are published to Redis"""
        return self._indicators_config.get("settings", {}).get("cache_enabled", True)

    @property
    def INDICATOR_CACHE_TTL_SECONDS(self) -> int:
        """TTL of cached latest values"""
        return self._indicators_config.get("settings", {}).get("cache_ttl_seconds", 60)

    # ============================================
    # SCHEDULED RUNNER (from YAML)
    # ============================================
    @property
    def INDICATOR_JOBS(self) -> list:
        """Scheduled recompute jobs from indicators.yaml"""
        return self._indicators_config.get("jobs", [])

    @property
    def INDICATOR_CANDLE_LOOKBACK(self) -> int:
        """Number of candles each scheduled recompute reads"""
        return self._indicators_config.get("runner", {}).get("candle_lookback", 1000)

    @property
    def INDICATOR_SERVICE_INTERVAL_SECONDS(self) -> int:
        """Seconds between scheduled recompute cycles"""
        return self._indicators_config.get("runner", {}).get("interval_seconds", 60)

    @property
    def INDICATOR_SERVICE_INITIAL_DELAY_SECONDS(self) -> int:
        """Delay before the first cycle"""
        return self._indicators_config.get("runner", {}).get("initial_delay_seconds", 10)


# Singleton pattern
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """
    Get application settings (singleton)

    Example:
        >>> settings = get_settings()
        >>> print(settings.INDICATOR_UPSERT_CHUNK_SIZE)
        1000
    """
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance
