"""Strategies: base interface and implementations."""

from ema_backtester.strategies.base import BaseStrategy
from ema_backtester.strategies.ema_crossover import EmaCrossoverStrategy, derive

__all__ = ["BaseStrategy", "EmaCrossoverStrategy", "derive"]
