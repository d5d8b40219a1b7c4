"""Backtest error types."""

from __future__ import annotations


class BacktestError(Exception):
    """Base class for failures that abort a backtest run."""


class InvalidPeriodError(BacktestError, ValueError):
    """Indicator period is not a positive integer."""

    def __init__(self, period: object) -> None:
        super().__init__(f"EMA period must be a positive integer, got {period!r}")
        self.period = period


class InsufficientDataError(BacktestError):
    """Not enough bars (or prices) for the requested computation.

    Attributes:
        required: Minimum number of data points needed.
        available: Number of data points supplied.
    """

    def __init__(self, required: int, available: int, what: str = "prices") -> None:
        super().__init__(f"Need at least {required} {what}, got {available}")
        self.required = required
        self.available = available


class DataLoadError(BacktestError):
    """Input file missing or contains no usable bars."""


class InvalidCapitalError(BacktestError, ValueError):
    """Starting capital is not a positive amount."""

    def __init__(self, capital: object) -> None:
        super().__init__(f"Starting capital must be greater than 0, got {capital!r}")
        self.capital = capital


def check_capital(capital: float) -> float:
    """Return capital as float, or raise InvalidCapitalError unless it is > 0."""
    try:
        value = float(capital)
    except (TypeError, ValueError):
        raise InvalidCapitalError(capital) from None
    if not value > 0:
        raise InvalidCapitalError(capital)
    return value
