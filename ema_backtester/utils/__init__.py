"""Utils: CSV ingestion and display formatting around the core engine."""

from ema_backtester.utils.csv_loader import bars_from_frame, load_bars_csv
from ema_backtester.utils.reporting import format_currency, format_pct, render_summary, tail

__all__ = [
    "bars_from_frame",
    "load_bars_csv",
    "format_currency",
    "format_pct",
    "render_summary",
    "tail",
]
