"""
Indicator table DDL and statements

Natural key (symbol, timeframe, ts, indicator_kind, parameter_identity) is
enforced by a unique index; ts has its own index for range scans.
"""

TABLE = "indicators"

DDL = f"""
CREATE TABLE IF NOT EXISTS {TABLE} (
    id bigserial PRIMARY KEY,
    symbol varchar(20) NOT NULL,
    timeframe varchar(10) NOT NULL DEFAULT '1m',
    ts timestamptz NOT NULL,
    indicator_kind varchar(50) NOT NULL,
    parameter_identity varchar(255) NOT NULL,
    value numeric(20, 8) NOT NULL,
    created_at timestamptz NOT NULL DEFAULT now(),
    updated_at timestamptz NOT NULL DEFAULT now()
);
CREATE UNIQUE INDEX IF NOT EXISTS indicator_lookup_idx
    ON {TABLE} (symbol, ts, timeframe, indicator_kind, parameter_identity);
CREATE INDEX IF NOT EXISTS indicator_timestamp_idx ON {TABLE} (ts);
"""

# execute_values expands the single VALUES %s placeholder
UPSERT_SQL = f"""
INSERT INTO {TABLE} (symbol, timeframe, ts, indicator_kind, parameter_identity, value)
VALUES %s
ON CONFLICT (symbol, ts, timeframe, indicator_kind, parameter_identity) DO UPDATE SET
    value = EXCLUDED.value,
    updated_at = now()
"""

SELECT_COLUMNS = (
    "symbol, timeframe, ts, indicator_kind, parameter_identity, value, created_at, updated_at"
)

SERIES_FILTER = (
    "symbol = %(symbol)s AND timeframe = %(timeframe)s "
    "AND indicator_kind = %(indicator_kind)s AND parameter_identity = %(parameter_identity)s"
)

SELECT_LATEST_SQL = f"""
SELECT {SELECT_COLUMNS} FROM {TABLE}
WHERE {SERIES_FILTER}
ORDER BY ts DESC
LIMIT %(limit)s
"""

DELETE_SERIES_SQL = f"DELETE FROM {TABLE} WHERE {SERIES_FILTER}"


def select_range_sql(has_start: bool, has_end: bool) -> str:
    """Range query with optional inclusive bounds, newest first"""
    conditions = [SERIES_FILTER]
    if has_start:
        conditions.append("ts >= %(start_time)s")
    if has_end:
        conditions.append("ts <= %(end_time)s")

    return f"""
SELECT {SELECT_COLUMNS} FROM {TABLE}
WHERE {" AND ".join(conditions)}
ORDER BY ts DESC
LIMIT %(limit)s
"""
