"""
Parameter codec for windowed indicators

Turns an indicator configuration ({"period": 20}) into the canonical
identity string stored as `parameter_identity` and used in cache keys:

    >>> canonicalize({"period": 20})
    '{"period":20}'
    >>> parse('{"period":20}')
    {'period': 20}

Semantically identical configurations always produce the same string,
regardless of key order, whitespace or int/float spelling (20 vs 20.0).
"""

import json
import math
from collections.abc import Mapping
from numbers import Real
from typing import Any

from core.errors import InvalidParameterError, ParameterErrorReason

# Upper bound on window length (bounds per-point cost)
MAX_PERIOD = 500

WINDOW_PARAM_KEYS = frozenset({"period"})


def validate_period(period: Any, max_period: int = MAX_PERIOD) -> int:
    """
    Validate a window length and return it as int

    Raises:
        InvalidParameterError: NOT_INTEGER, NOT_POSITIVE or TOO_LARGE
    """
    if isinstance(period, bool) or not isinstance(period, Real):
        raise InvalidParameterError(
            ParameterErrorReason.NOT_INTEGER, f"period must be an integer, got {period!r}"
        )

    if not math.isfinite(period):
        raise InvalidParameterError(
            ParameterErrorReason.NOT_INTEGER, f"period must be an integer, got {period}"
        )

    if period <= 0:
        raise InvalidParameterError(
            ParameterErrorReason.NOT_POSITIVE, f"period must be positive, got {period}"
        )

    if int(period) != period:
        raise InvalidParameterError(
            ParameterErrorReason.NOT_INTEGER, f"period must be an integer, got {period}"
        )

    if period > max_period:
        raise InvalidParameterError(
            ParameterErrorReason.TOO_LARGE, f"period too large (max {max_period}), got {period}"
        )

    return int(period)


def validate_limit(value: Any, name: str = "limit") -> int:
    """
    Validate a row/candle count (count, limit) and return it as int

    Raises:
        InvalidParameterError: NOT_INTEGER or NOT_POSITIVE
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameterError(
            ParameterErrorReason.NOT_INTEGER, f"{name} must be an integer, got {value!r}"
        )

    if value <= 0:
        raise InvalidParameterError(
            ParameterErrorReason.NOT_POSITIVE, f"{name} must be positive, got {value}"
        )

    return value


def validate(params: Any, max_period: int = MAX_PERIOD) -> dict[str, int]:
    """
    Validate windowed-indicator parameters

    Args:
        params: Mapping with exactly one key, "period"
        max_period: Ceiling for the window length

    Returns:
        Normalized copy of params

    Raises:
        InvalidParameterError: If params fail validation
    """
    if not isinstance(params, Mapping):
        raise InvalidParameterError(
            ParameterErrorReason.MALFORMED, f"parameters must be an object, got {type(params).__name__}"
        )

    unknown = set(params) - WINDOW_PARAM_KEYS
    if unknown:
        raise InvalidParameterError(
            ParameterErrorReason.MALFORMED, f"unknown parameters: {sorted(unknown)}"
        )

    if "period" not in params or params["period"] is None:
        raise InvalidParameterError(ParameterErrorReason.MALFORMED, "missing period")

    return {"period": validate_period(params["period"], max_period)}


def canonicalize(params: Mapping[str, Any], max_period: int = MAX_PERIOD) -> str:
    """Serialize params to their canonical identity string"""
    normalized = validate(params, max_period)
    return json.dumps(normalized, sort_keys=True, separators=(",", ":"))


def _reject_constant(name: str):
    # NaN, Infinity, -Infinity are not JSON
    raise ValueError(f"invalid constant {name}")


def parse(text: str, max_period: int = MAX_PERIOD) -> dict[str, int]:
    """
    Decode an identity string back into params

    Raises:
        InvalidParameterError: MALFORMED for undecodable text, or any
            validation reason for decodable but invalid params
    """
    try:
        params = json.loads(text, parse_constant=_reject_constant)
    except (TypeError, ValueError) as e:
        raise InvalidParameterError(ParameterErrorReason.MALFORMED, str(e)) from e

    return validate(params, max_period)
