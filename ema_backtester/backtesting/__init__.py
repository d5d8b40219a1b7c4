"""Backtesting: trade simulator and the bars-to-metrics engine."""

from ema_backtester.backtesting.engine import BacktestEngine, BacktestResult, equity_curve
from ema_backtester.backtesting.simulator import simulate, step

__all__ = [
    "BacktestEngine",
    "BacktestResult",
    "equity_curve",
    "simulate",
    "step",
]
