"""
Core data types for bars, signal events, and trades.
All records are frozen: each pipeline stage builds new ones instead of mutating.
"""

from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Sequence, Union


class SignalType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class Bar:
    """Daily OHLCV candle."""
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: int


@dataclass(frozen=True)
class EnrichedBar:
    """Bar plus EMA values (None during warm-up) and the bullish crossover state."""
    bar: Bar
    ema_fast: Optional[float]
    ema_slow: Optional[float]
    signal: bool

    @property
    def date(self) -> date:
        return self.bar.date

    @property
    def close(self) -> float:
        return self.bar.close


@dataclass(frozen=True)
class SignalEvent:
    """Crossover transition on a given bar."""
    date: date
    type: SignalType
    price: float
    ema_fast: float
    ema_slow: float


@dataclass(frozen=True)
class BuyTrade:
    """Entry fill: all cash converted to shares."""
    date: date
    price: float
    shares: float
    capital_after: float

    @property
    def action(self) -> SignalType:
        return SignalType.BUY


@dataclass(frozen=True)
class SellTrade:
    """Exit fill with realized profit."""
    date: date
    price: float
    shares: float
    capital_after: float
    profit: float
    profit_percent: float

    @property
    def action(self) -> SignalType:
        return SignalType.SELL


Trade = Union[BuyTrade, SellTrade]


@dataclass(frozen=True)
class PositionState:
    """Cash, shares held, and entry price (None while flat)."""
    capital: float
    shares: float = 0.0
    entry_price: Optional[float] = None

    @property
    def is_long(self) -> bool:
        return self.shares > 0

    def market_value(self, price: float) -> float:
        """Cash plus open shares valued at `price`."""
        return self.capital + self.shares * price

    @classmethod
    def after(cls, trade: Trade) -> "PositionState":
        """State right after an executed trade."""
        if isinstance(trade, BuyTrade):
            return cls(capital=trade.capital_after, shares=trade.shares, entry_price=trade.price)
        return cls(capital=trade.capital_after)

    @classmethod
    def from_ledger(cls, ledger: Sequence[Trade], starting_capital: float) -> "PositionState":
        """State after the last ledger entry; flat with the starting cash if nothing executed."""
        if not ledger:
            return cls(capital=float(starting_capital))
        return cls.after(ledger[-1])
