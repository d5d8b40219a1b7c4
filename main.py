#!/usr/bin/env python3
"""
EMA crossover backtester CLI.
Usage:
  python main.py backtest --csv prices.csv [--config config.yaml] [--fast 13] [--slow 21] [--capital 100000] [--export out.csv]
"""

from __future__ import annotations
import sys
from pathlib import Path

# Project root
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from ema_backtester.cli import main


if __name__ == "__main__":
    sys.exit(main())
