"""
Exponential moving average seeded with a simple moving average.

Output has one value per price from the period-th price onward, so
ema[i] lines up with prices[i + period - 1].
"""

from __future__ import annotations
from typing import List, Sequence

import numpy as np

from ema_backtester.core.errors import InsufficientDataError, InvalidPeriodError


def ema_multiplier(period: int) -> float:
    """Smoothing factor 2 / (period + 1)."""
    return 2.0 / (period + 1)


def check_period(period: int) -> int:
    """Return period, or raise InvalidPeriodError unless it is an integer >= 1."""
    if isinstance(period, bool) or not isinstance(period, (int, np.integer)) or period < 1:
        raise InvalidPeriodError(period)
    return int(period)


def compute_ema(prices: Sequence[float], period: int) -> List[float]:
    """
    EMA of prices. Seed = mean of the first `period` prices, then
    ema[k] = (price - ema[k-1]) * multiplier + ema[k-1].
    Raises InvalidPeriodError for period < 1, InsufficientDataError if len(prices) < period.
    """
    period = check_period(period)
    arr = np.asarray(prices, dtype=float)
    if len(arr) < period:
        raise InsufficientDataError(period, len(arr))
    multiplier = ema_multiplier(period)
    prev = float(arr[:period].mean())
    out = [prev]
    for price in arr[period:]:
        prev = (float(price) - prev) * multiplier + prev
        out.append(prev)
    return out
