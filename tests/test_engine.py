"""Tests for backtesting.engine: full bars -> metrics runs."""

import pytest

from ema_backtester.backtesting.engine import BacktestEngine
from ema_backtester.core.errors import InsufficientDataError, InvalidCapitalError
from ema_backtester.core.types import SignalType
from ema_backtester.strategies.ema_crossover import EmaCrossoverStrategy


def test_constant_prices_no_trades(make_bars):
    result = BacktestEngine(initial_capital=100000.0).run(make_bars([100.0] * 30))
    assert result.signal_events == []
    assert result.trades == []
    m = result.metrics
    assert m.total_return_pct == 0.0
    assert m.buy_and_hold_return_pct == 0.0
    assert m.final_value == 100000.0
    assert result.equity_curve == [100000.0] * 30


def test_linear_rise_with_reset_warmup(make_bars, linear_closes):
    strategy = EmaCrossoverStrategy(carry_warmup_state=False)
    result = BacktestEngine(strategy, initial_capital=100000.0).run(make_bars(linear_closes))
    assert [e.type for e in result.signal_events] == [SignalType.BUY]
    assert len(result.trades) == 1
    shares = 100000.0 / linear_closes[22]
    m = result.metrics
    assert m.final_value == pytest.approx(shares * 200.0)
    assert m.total_return_pct == pytest.approx((shares * 200.0 - 100000.0) / 1000.0)
    assert m.buy_and_hold_return_pct == pytest.approx(100.0)
    assert m.total_closed_trades == 0
    assert result.equity_curve[-1] == pytest.approx(m.final_value)


def test_linear_rise_with_carried_warmup(make_bars, linear_closes):
    result = BacktestEngine(initial_capital=100000.0).run(make_bars(linear_closes))
    assert result.signal_events == []
    assert result.metrics.final_value == 100000.0


def test_round_trip(make_bars, v_shape_closes):
    result = BacktestEngine(initial_capital=10000.0).run(make_bars(v_shape_closes))
    assert [t.action for t in result.trades] == [SignalType.BUY, SignalType.SELL]
    sell = result.trades[-1]
    m = result.metrics
    assert m.total_closed_trades == 1
    assert m.final_value == pytest.approx(sell.capital_after)
    assert 0.0 <= m.win_rate_pct <= 100.0
    assert len(result.equity_curve) == len(v_shape_closes)
    assert result.equity_curve[0] == 10000.0
    assert result.equity_curve[-1] == pytest.approx(m.final_value)


def test_to_frame(make_bars, v_shape_closes):
    result = BacktestEngine().run(make_bars(v_shape_closes))
    df = result.to_frame()
    assert len(df) == len(v_shape_closes)
    assert list(df.columns) == [
        "date", "open", "high", "low", "close", "volume", "ema_fast", "ema_slow", "signal", "equity",
    ]
    assert df["ema_slow"].isna().sum() == 20
    assert df["close"].tolist() == v_shape_closes


def test_insufficient_bars(make_bars):
    with pytest.raises(InsufficientDataError):
        BacktestEngine().run(make_bars([100.0] * 10))


@pytest.mark.parametrize("capital", [0.0, -5000.0])
def test_engine_rejects_non_positive_capital(capital):
    with pytest.raises(InvalidCapitalError):
        BacktestEngine(initial_capital=capital)
