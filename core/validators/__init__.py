"""
Validators module

Data quality checks for candle input
"""

from core.validators.market_data import is_ordered, normalize_candles

__all__ = ["is_ordered", "normalize_candles"]
