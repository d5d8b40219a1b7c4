"""
Single-position, fully invested, long-only trade simulator.

State is an explicit PositionState folded over the event stream:
FLAT (shares == 0) -> LONG on BUY, LONG -> FLAT on SELL. Events that do not
match the current state are ignored.
"""

from __future__ import annotations
import logging
from typing import Iterable, List, Optional, Tuple

from ema_backtester.core.errors import check_capital
from ema_backtester.core.types import (
    BuyTrade,
    PositionState,
    SellTrade,
    SignalEvent,
    SignalType,
    Trade,
)

logger = logging.getLogger("ema_backtester.backtest.simulator")


def step(state: PositionState, event: SignalEvent) -> Tuple[PositionState, Optional[Trade]]:
    """Apply one event. Returns the new state and the executed trade, if any."""
    if event.type == SignalType.BUY:
        if state.is_long:
            logger.debug("BUY on %s ignored: already long", event.date)
            return state, None
        shares = state.capital / event.price
        new_state = PositionState(capital=0.0, shares=shares, entry_price=event.price)
        return new_state, BuyTrade(
            date=event.date,
            price=event.price,
            shares=shares,
            capital_after=new_state.capital,
        )

    if not state.is_long:
        logger.debug("SELL on %s ignored: flat", event.date)
        return state, None
    cost = state.shares * state.entry_price
    capital = state.shares * event.price
    profit = capital - cost
    trade = SellTrade(
        date=event.date,
        price=event.price,
        shares=state.shares,
        capital_after=capital,
        profit=profit,
        profit_percent=profit / cost * 100,
    )
    return PositionState(capital=capital), trade


def simulate(signal_events: Iterable[SignalEvent], starting_capital: float) -> List[Trade]:
    """
    Run the event stream through the state machine and return the trade ledger.
    Raises InvalidCapitalError unless starting_capital > 0.
    """
    state = PositionState(capital=check_capital(starting_capital))
    ledger: List[Trade] = []
    for event in signal_events:
        state, trade = step(state, event)
        if trade is not None:
            logger.debug("%s %.6f @ %.4f on %s", trade.action.value, trade.shares, trade.price, trade.date)
            ledger.append(trade)
    return ledger
