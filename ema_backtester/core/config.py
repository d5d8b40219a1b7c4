"""
Load configuration from config.yaml and .env. Env vars override file values.
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv


def _env_path(project_root: Optional[Path] = None) -> Path:
    root = project_root or Path(__file__).resolve().parents[2]
    return root / ".env"


def load_dotenv_if_exists(project_root: Optional[Path] = None) -> None:
    """Load .env from project root if present."""
    path = _env_path(project_root)
    if path.exists():
        load_dotenv(path)


def load_config(config_path: Optional[Path] = None, project_root: Optional[Path] = None) -> "Config":
    """Load config.yaml and overlay with env. Returns Config."""
    load_dotenv_if_exists(project_root)
    root = project_root or Path(__file__).resolve().parents[2]
    path = config_path or root / "config.yaml"
    data: dict[str, Any] = {}
    if path.exists():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

    def env(key: str, default: Optional[str] = None) -> Optional[str]:
        value = os.getenv(key)
        if value is None or not value.strip():
            return default
        return value.strip()

    def env_bool(key: str, default: bool = False) -> bool:
        value = os.getenv(key)
        if value is None:
            return bool(default)
        return value.lower() in ("true", "1", "yes")

    def env_int(key: str, default: int = 0) -> int:
        try:
            return int(os.getenv(key, str(default)))
        except ValueError:
            return default

    def env_float(key: str, default: float = 0.0) -> float:
        try:
            return float(os.getenv(key, str(default)))
        except ValueError:
            return default

    strategy = data.get("strategy", {}) or {}
    backtest = data.get("backtest", {}) or {}
    display = data.get("display", {}) or {}
    logging_cfg = data.get("logging", {}) or {}

    return Config(
        # Strategy
        ema_fast=env_int("EMA_FAST", strategy.get("ema_fast", 13)),
        ema_slow=env_int("EMA_SLOW", strategy.get("ema_slow", 21)),
        carry_warmup_state=env_bool("CARRY_WARMUP_STATE", strategy.get("carry_warmup_state", True)),
        # Backtest
        initial_capital=env_float("INITIAL_CAPITAL", backtest.get("initial_capital", 100000.0)),
        csv_path=env("DATA_CSV", backtest.get("csv_path")),
        # Display windows (presentation only)
        max_bars=int(display.get("max_bars", 500)),
        max_signals=int(display.get("max_signals", 100)),
        max_trades=int(display.get("max_trades", 10)),
        # Logging
        log_level=env("LOG_LEVEL", logging_cfg.get("level", "INFO")),
        log_dir=Path(logging_cfg.get("log_dir", "logs")),
        log_file=logging_cfg.get("log_file", "ema_backtester.log"),
    )


class Config:
    """Unified configuration. Immutable after load."""

    __slots__ = (
        "ema_fast", "ema_slow", "carry_warmup_state",
        "initial_capital", "csv_path",
        "max_bars", "max_signals", "max_trades",
        "log_level", "log_dir", "log_file",
    )

    def __init__(
        self,
        ema_fast: int = 13,
        ema_slow: int = 21,
        carry_warmup_state: bool = True,
        initial_capital: float = 100000.0,
        csv_path: Optional[str] = None,
        max_bars: int = 500,
        max_signals: int = 100,
        max_trades: int = 10,
        log_level: str = "INFO",
        log_dir: Path = None,
        log_file: str = "ema_backtester.log",
    ):
        self.ema_fast = ema_fast
        self.ema_slow = ema_slow
        self.carry_warmup_state = carry_warmup_state
        self.initial_capital = float(initial_capital)
        self.csv_path = Path(csv_path) if csv_path else None
        self.max_bars = max_bars
        self.max_signals = max_signals
        self.max_trades = max_trades
        self.log_level = log_level
        self.log_dir = Path(log_dir) if log_dir else Path("logs")
        self.log_file = log_file
