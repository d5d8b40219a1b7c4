"""Unit tests for backtesting.simulator."""

from datetime import date

import pytest

from ema_backtester.backtesting.simulator import simulate, step
from ema_backtester.core.errors import InvalidCapitalError
from ema_backtester.core.types import BuyTrade, PositionState, SellTrade, SignalEvent, SignalType


def _event(day: int, kind: SignalType, price: float) -> SignalEvent:
    return SignalEvent(date=date(2024, 3, day), type=kind, price=price, ema_fast=price, ema_slow=price)


def test_buy_then_sell_profit():
    ledger = simulate([_event(1, SignalType.BUY, 100.0), _event(2, SignalType.SELL, 110.0)], 100000.0)
    buy, sell = ledger
    assert isinstance(buy, BuyTrade)
    assert buy.shares == pytest.approx(1000.0)
    assert buy.capital_after == 0.0
    assert isinstance(sell, SellTrade)
    assert sell.capital_after == pytest.approx(110000.0)
    assert sell.profit == pytest.approx(10000.0)
    assert sell.profit_percent == pytest.approx(10.0)


def test_buy_while_long_is_ignored():
    events = [
        _event(1, SignalType.BUY, 100.0),
        _event(2, SignalType.BUY, 50.0),
        _event(3, SignalType.SELL, 90.0),
    ]
    ledger = simulate(events, 1000.0)
    assert [t.action for t in ledger] == [SignalType.BUY, SignalType.SELL]
    assert ledger[1].profit == pytest.approx(-100.0)
    assert ledger[1].profit_percent == pytest.approx(-10.0)


def test_sell_while_flat_is_ignored():
    ledger = simulate([_event(1, SignalType.SELL, 100.0)], 1000.0)
    assert ledger == []


def test_ledger_never_repeats_action():
    kinds = [SignalType.SELL, SignalType.BUY, SignalType.BUY, SignalType.SELL,
             SignalType.SELL, SignalType.BUY, SignalType.SELL, SignalType.BUY]
    events = [_event(i + 1, k, 100.0 + i) for i, k in enumerate(kinds)]
    ledger = simulate(events, 5000.0)
    actions = [t.action for t in ledger]
    assert actions[0] == SignalType.BUY
    assert all(a != b for a, b in zip(actions, actions[1:]))
    assert all(t.shares >= 0 for t in ledger)


def test_step_returns_new_state():
    state = PositionState(capital=500.0)
    new_state, trade = step(state, _event(1, SignalType.BUY, 25.0))
    assert state.capital == 500.0 and state.shares == 0.0
    assert new_state.shares == pytest.approx(20.0)
    assert new_state.entry_price == 25.0
    assert new_state.is_long
    assert trade.action == SignalType.BUY


def test_position_from_ledger_and_market_value():
    assert PositionState.from_ledger([], 1000.0) == PositionState(capital=1000.0)
    ledger = simulate([_event(1, SignalType.BUY, 10.0)], 1000.0)
    state = PositionState.from_ledger(ledger, 1000.0)
    assert state.is_long
    assert state.shares == pytest.approx(100.0)
    assert state.entry_price == 10.0
    assert state.market_value(12.0) == pytest.approx(1200.0)
    ledger = simulate([_event(1, SignalType.BUY, 10.0), _event(2, SignalType.SELL, 8.0)], 1000.0)
    state = PositionState.from_ledger(ledger, 1000.0)
    assert not state.is_long
    assert state.market_value(50.0) == pytest.approx(800.0)


@pytest.mark.parametrize("capital", [0.0, -1000.0, float("nan"), "lots"])
def test_simulate_rejects_non_positive_capital(capital):
    with pytest.raises(InvalidCapitalError):
        simulate([_event(1, SignalType.BUY, 10.0), _event(2, SignalType.BUY, 11.0)], capital)


def test_invalid_capital_is_value_error():
    with pytest.raises(ValueError):
        simulate([], 0)
