"""Display helpers: number formatting and tail windows. Never alter computed series."""

from __future__ import annotations
from typing import List, Sequence, TypeVar

from ema_backtester.backtesting.engine import BacktestResult
from ema_backtester.core.types import SellTrade

T = TypeVar("T")


def tail(items: Sequence[T], limit: int) -> List[T]:
    """Last `limit` items as a new list (all of them if limit <= 0)."""
    if limit <= 0:
        return list(items)
    return list(items[-limit:])


def format_currency(value: float, symbol: str = "$") -> str:
    """Abbreviate with K/M/B suffix, 2 decimals."""
    sign = "-" if value < 0 else ""
    v = abs(value)
    for threshold, suffix in ((1e9, "B"), (1e6, "M"), (1e3, "K")):
        if v >= threshold:
            return f"{sign}{symbol}{v / threshold:.2f}{suffix}"
    return f"{sign}{symbol}{v:.2f}"


def format_pct(value: float) -> str:
    return f"{value:+.2f}%"


def render_summary(result: BacktestResult, max_signals: int = 100, max_trades: int = 10) -> str:
    """Plain-text report: metrics, recent signals, recent trades."""
    m = result.metrics
    if m is None:
        return "No results."
    lines = [
        "--- Backtest Results ---",
        f"Final value: {format_currency(m.final_value)}",
        f"Total return: {format_pct(m.total_return_pct)}",
        f"Buy & hold: {format_pct(m.buy_and_hold_return_pct)}",
        f"Closed trades: {m.total_closed_trades} (wins: {m.winning_trades}, losses: {m.losing_trades})",
        f"Win rate: {m.win_rate_pct:.2f}%",
        f"Avg profit: {format_currency(m.avg_profit)} | Avg loss: {format_currency(m.avg_loss)}",
        f"Max drawdown: {m.max_drawdown:.2f}%",
    ]
    signals = tail(result.signal_events, max_signals)
    if signals:
        lines.append(f"\nSignals (last {len(signals)} of {len(result.signal_events)}):")
        for e in signals:
            lines.append(f"  {e.date} {e.type.value:<4} @ {e.price:.2f}  fast={e.ema_fast:.2f} slow={e.ema_slow:.2f}")
    trades = tail(result.trades, max_trades)
    if trades:
        lines.append(f"\nTrades (last {len(trades)} of {len(result.trades)}):")
        for t in trades:
            line = f"  {t.date} {t.action.value:<4} {t.shares:.4f} @ {t.price:.2f}  cash={format_currency(t.capital_after)}"
            if isinstance(t, SellTrade):
                line += f"  P/L={format_currency(t.profit)} ({format_pct(t.profit_percent)})"
            lines.append(line)
    return "\n".join(lines)
