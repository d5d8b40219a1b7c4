"""
Logging for the backtester. Module loggers are children of "ema_backtester"
(ema_backtester.strategy, ema_backtester.backtest, ...) and propagate to the
handlers installed here.
"""

from __future__ import annotations
import logging
import sys
from pathlib import Path
from typing import Optional, TextIO

LOGGER_NAME = "ema_backtester"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_level(level: str) -> int:
    """Level name (case-insensitive) to logging constant; INFO if unknown."""
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def close_handlers(logger: logging.Logger) -> None:
    """Detach and close every handler on logger (releases log files)."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def setup_logging(
    level: str = "INFO",
    log_dir: Optional[Path] = None,
    log_file: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the package logger with a console handler and, when both
    log_dir and log_file are given, a file handler. Safe to call again:
    previous handlers are closed and replaced, never stacked.
    """
    pkg = logging.getLogger(LOGGER_NAME)
    close_handlers(pkg)
    pkg.setLevel(parse_level(level))
    # Records stop here so an application-level root handler does not print them twice.
    pkg.propagate = False

    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)
    console = logging.StreamHandler(stream or sys.stdout)
    console.setFormatter(formatter)
    pkg.addHandler(console)

    if log_dir and log_file:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_dir / log_file, encoding="utf-8")
        fh.setFormatter(formatter)
        pkg.addHandler(fh)

    return pkg
