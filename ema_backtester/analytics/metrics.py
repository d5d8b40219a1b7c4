"""
Performance metrics from a trade ledger and the underlying price series.
Percentages are in percent units (10.0 = 10%).
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from ema_backtester.core.errors import InsufficientDataError, check_capital
from ema_backtester.core.types import EnrichedBar, PositionState, SellTrade, Trade


@dataclass(frozen=True)
class Metrics:
    """Summary of one backtest run."""
    total_return_pct: float
    buy_and_hold_return_pct: float
    final_value: float
    total_closed_trades: int
    winning_trades: int
    losing_trades: int
    win_rate_pct: float
    avg_profit: float
    avg_loss: float
    max_drawdown: float = 0.0  # not computed


def closed_trades(ledger: Sequence[Trade]) -> List[SellTrade]:
    """SELL entries of the ledger, in order."""
    return [t for t in ledger if isinstance(t, SellTrade)]


def win_rate(profits: Sequence[float]) -> float:
    """Percent of trades with positive profit. 0 when there are none."""
    if not profits:
        return 0.0
    return sum(1 for p in profits if p > 0) / len(profits) * 100.0


def average(values: Sequence[float]) -> float:
    """Mean, or 0 for an empty sequence."""
    if not values:
        return 0.0
    return float(np.mean(values))


def buy_and_hold_return_pct(first_close: float, last_close: float) -> float:
    return (last_close - first_close) / first_close * 100.0


def aggregate(
    enriched_bars: Sequence[EnrichedBar],
    trade_ledger: Sequence[Trade],
    starting_capital: float,
) -> Metrics:
    """
    Compute Metrics. An open position at the end is valued at the last close.
    Zero-profit exits count as closed trades but neither wins nor losses.
    Raises InvalidCapitalError unless starting_capital > 0.
    """
    starting_capital = check_capital(starting_capital)
    if not enriched_bars:
        raise InsufficientDataError(1, 0, what="bars")
    first_close = enriched_bars[0].close
    last_close = enriched_bars[-1].close

    final_value = PositionState.from_ledger(trade_ledger, starting_capital).market_value(last_close)
    profits = [t.profit for t in closed_trades(trade_ledger)]
    wins = [p for p in profits if p > 0]
    losses = [p for p in profits if p < 0]

    return Metrics(
        total_return_pct=(final_value - starting_capital) / starting_capital * 100.0,
        buy_and_hold_return_pct=buy_and_hold_return_pct(first_close, last_close),
        final_value=final_value,
        total_closed_trades=len(profits),
        winning_trades=len(wins),
        losing_trades=len(losses),
        win_rate_pct=win_rate(profits),
        avg_profit=average(wins),
        avg_loss=average(losses),
        max_drawdown=0.0,
    )
