"""Core: config, types, errors, logging."""

from ema_backtester.core.config import load_config, Config
from ema_backtester.core.errors import (
    BacktestError,
    DataLoadError,
    InsufficientDataError,
    InvalidCapitalError,
    InvalidPeriodError,
)
from ema_backtester.core.types import (
    Bar,
    BuyTrade,
    EnrichedBar,
    PositionState,
    SellTrade,
    SignalEvent,
    SignalType,
    Trade,
)
from ema_backtester.core.logger import setup_logging

__all__ = [
    "load_config",
    "Config",
    "BacktestError",
    "DataLoadError",
    "InsufficientDataError",
    "InvalidCapitalError",
    "InvalidPeriodError",
    "Bar",
    "BuyTrade",
    "EnrichedBar",
    "PositionState",
    "SellTrade",
    "SignalEvent",
    "SignalType",
    "Trade",
    "setup_logging",
]
