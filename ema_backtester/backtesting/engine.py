"""
Backtest engine: bars -> EMAs -> crossover events -> trades -> metrics.
One run either returns a complete BacktestResult or raises; nothing partial.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import pandas as pd

from ema_backtester.analytics.metrics import Metrics, aggregate
from ema_backtester.backtesting.simulator import simulate
from ema_backtester.core.errors import InsufficientDataError, check_capital
from ema_backtester.core.types import Bar, EnrichedBar, PositionState, SignalEvent, Trade
from ema_backtester.strategies.base import BaseStrategy
from ema_backtester.strategies.ema_crossover import EmaCrossoverStrategy

logger = logging.getLogger("ema_backtester.backtest")


@dataclass
class BacktestResult:
    """Backtest output: enriched series, events, ledger, metrics, equity per bar."""
    enriched_bars: List[EnrichedBar] = field(default_factory=list)
    signal_events: List[SignalEvent] = field(default_factory=list)
    trades: List[Trade] = field(default_factory=list)
    equity_curve: List[float] = field(default_factory=list)
    metrics: Optional[Metrics] = None

    def to_frame(self) -> pd.DataFrame:
        """Enriched bars as a DataFrame (one row per bar) for charting/export."""
        rows = [
            {
                "date": pd.Timestamp(row.date),
                "open": row.bar.open,
                "high": row.bar.high,
                "low": row.bar.low,
                "close": row.bar.close,
                "volume": row.bar.volume,
                "ema_fast": row.ema_fast,
                "ema_slow": row.ema_slow,
                "signal": row.signal,
            }
            for row in self.enriched_bars
        ]
        df = pd.DataFrame(
            rows,
            columns=["date", "open", "high", "low", "close", "volume", "ema_fast", "ema_slow", "signal"],
        )
        df["equity"] = pd.Series(self.equity_curve, dtype=float)
        return df


def equity_curve(enriched_bars: Sequence[EnrichedBar], trades: Sequence[Trade], starting_capital: float) -> List[float]:
    """Mark-to-market portfolio value at each bar close, applying trades on their bar date."""
    by_date = {t.date: t for t in trades}
    state = PositionState(capital=float(starting_capital))
    curve = []
    for row in enriched_bars:
        trade = by_date.get(row.date)
        if trade is not None:
            state = PositionState.after(trade)
        curve.append(state.market_value(row.close))
    return curve


class BacktestEngine:
    """
    Runs a crossover strategy over a date-ordered bar series with a starting
    capital. Long only, fully invested, no fees or slippage.
    """

    def __init__(
        self,
        strategy: Optional[BaseStrategy] = None,
        initial_capital: float = 100000.0,
    ):
        self.strategy = strategy or EmaCrossoverStrategy()
        self.initial_capital = check_capital(initial_capital)

    def run(self, bars: Sequence[Bar]) -> BacktestResult:
        """
        Run the full pipeline on bars sorted ascending by date with close > 0.
        Raises InsufficientDataError if there are too few bars for the strategy.
        """
        bars = list(bars)
        if len(bars) < self.strategy.min_bars:
            raise InsufficientDataError(self.strategy.min_bars, len(bars), what="bars")
        enriched, events = self.strategy.derive(bars)
        trades = simulate(events, self.initial_capital)
        metrics = aggregate(enriched, trades, self.initial_capital)
        curve = equity_curve(enriched, trades, self.initial_capital)
        logger.info(
            "Backtest %s..%s: %d bars, %d signals, %d trades, return %.2f%% (buy&hold %.2f%%)",
            bars[0].date, bars[-1].date, len(bars), len(events), len(trades),
            metrics.total_return_pct, metrics.buy_and_hold_return_pct,
        )
        return BacktestResult(
            enriched_bars=enriched,
            signal_events=events,
            trades=trades,
            equity_curve=curve,
            metrics=metrics,
        )
