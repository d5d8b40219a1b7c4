"""Shared fixtures for backtester tests."""

from __future__ import annotations
import logging
from datetime import date, timedelta
from typing import Callable, List, Sequence

import pytest

from ema_backtester.core.logger import LOGGER_NAME, close_handlers
from ema_backtester.core.types import Bar


@pytest.fixture
def make_bars() -> Callable[[Sequence[float]], List[Bar]]:
    """Factory: daily bars (one per calendar day from 2024-01-01) with the given closes."""

    def _make(closes: Sequence[float]) -> List[Bar]:
        start = date(2024, 1, 1)
        return [
            Bar(
                date=start + timedelta(days=i),
                open=c,
                high=c * 1.01,
                low=c * 0.99,
                close=c,
                volume=1000 + i,
            )
            for i, c in enumerate(closes)
        ]

    return _make


@pytest.fixture
def linear_closes() -> List[float]:
    """40 closes rising linearly from 100 to 200."""
    return [100 + i * 100 / 39 for i in range(40)]


@pytest.fixture
def v_shape_closes() -> List[float]:
    """60 bars down, 60 bars up, 60 bars down: one bullish crossover then one bearish."""
    down = [300 - 2 * i for i in range(60)]
    up = [down[-1] + 2 * (i + 1) for i in range(60)]
    down2 = [up[-1] - 2 * (i + 1) for i in range(60)]
    return [float(c) for c in down + up + down2]


@pytest.fixture
def reset_package_logger():
    """Undo setup_logging() after the test: close handlers, restore defaults."""
    yield logging.getLogger(LOGGER_NAME)
    pkg = logging.getLogger(LOGGER_NAME)
    close_handlers(pkg)
    pkg.setLevel(logging.NOTSET)
    pkg.propagate = True


@pytest.fixture
def write_prices(tmp_path):
    """Factory: write closes as a daily OHLCV CSV (with header) and return its path."""

    def _write(closes: Sequence[float], name: str = "prices.csv"):
        start = date(2024, 1, 1)
        lines = ["date,open,high,low,close,volume"]
        for i, c in enumerate(closes):
            lines.append(f"{start + timedelta(days=i)},{c},{c},{c},{c},{1000 + i}")
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return path

    return _write
