"""Analytics: backtest summary metrics (returns, win rate, average win/loss)."""

from ema_backtester.analytics.metrics import (
    Metrics,
    aggregate,
    average,
    buy_and_hold_return_pct,
    closed_trades,
    win_rate,
)

__all__ = [
    "Metrics",
    "aggregate",
    "average",
    "buy_and_hold_return_pct",
    "closed_trades",
    "win_rate",
]
