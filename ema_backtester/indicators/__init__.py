"""Indicators: exponential moving average."""

from ema_backtester.indicators.ema import check_period, compute_ema, ema_multiplier

__all__ = ["check_period", "compute_ema", "ema_multiplier"]
