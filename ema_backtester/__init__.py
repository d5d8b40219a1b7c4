"""EMA crossover backtester: indicators, signals, trade simulation, metrics."""

__version__ = "0.1.0"
