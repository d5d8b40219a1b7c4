"""
Command-line entry: backtest a daily OHLCV CSV with the EMA crossover strategy.
"""

from __future__ import annotations
import argparse
import logging
from pathlib import Path
from typing import List, Optional

from ema_backtester.backtesting.engine import BacktestEngine
from ema_backtester.core.config import load_config
from ema_backtester.core.errors import BacktestError
from ema_backtester.core.logger import setup_logging
from ema_backtester.strategies.ema_crossover import EmaCrossoverStrategy
from ema_backtester.utils.csv_loader import load_bars_csv
from ema_backtester.utils.reporting import render_summary

ROOT = Path(__file__).resolve().parents[1]


def run_backtest(args: argparse.Namespace, project_root: Optional[Path] = None) -> int:
    """Load bars from CSV, run the crossover backtest, print the summary. Returns exit status."""
    config = load_config(args.config, project_root or ROOT)
    setup_logging(config.log_level, config.log_dir, config.log_file)
    logger = logging.getLogger("ema_backtester.cli")
    csv_path = args.csv or config.csv_path
    if csv_path is None:
        logger.error("No input CSV. Pass --csv or set DATA_CSV / backtest.csv_path")
        return 1
    try:
        bars = load_bars_csv(csv_path)
        strategy = EmaCrossoverStrategy(
            fast_period=args.fast if args.fast is not None else config.ema_fast,
            slow_period=args.slow if args.slow is not None else config.ema_slow,
            carry_warmup_state=config.carry_warmup_state,
        )
        engine = BacktestEngine(
            strategy=strategy,
            initial_capital=args.capital if args.capital is not None else config.initial_capital,
        )
        result = engine.run(bars)
    except BacktestError as e:
        logger.error("Backtest failed: %s", e)
        return 1
    print()
    print(render_summary(result, max_signals=config.max_signals, max_trades=config.max_trades))
    if args.export:
        result.to_frame().tail(config.max_bars).to_csv(args.export, index=False)
        logger.info("Wrote last %d bars to %s", min(config.max_bars, len(result.enriched_bars)), args.export)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="EMA crossover backtester")
    parser.add_argument("mode", choices=["backtest"], help="Run a backtest")
    parser.add_argument("--csv", type=Path, default=None, help="Daily OHLCV CSV (date,open,high,low,close,volume)")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--fast", type=int, default=None, help="Fast EMA period")
    parser.add_argument("--slow", type=int, default=None, help="Slow EMA period")
    parser.add_argument("--capital", type=float, default=None, help="Starting capital")
    parser.add_argument("--export", type=Path, default=None, help="Write enriched bars (last display.max_bars rows) to CSV")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return run_backtest(args)
