"""
Daily OHLCV CSV -> sorted list of Bar.
Columns by position: date, open, high, low, close, volume. Header row optional.
Unparseable numbers become 0; rows with a bad date or close <= 0 are dropped.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import List, Union

import pandas as pd

from ema_backtester.core.errors import DataLoadError
from ema_backtester.core.types import Bar

logger = logging.getLogger("ema_backtester.utils.csv_loader")

COLUMNS = ["date", "open", "high", "low", "close", "volume"]
PRICE_COLUMNS = ["open", "high", "low", "close"]


def bars_from_frame(df: pd.DataFrame) -> List[Bar]:
    """Clean a DataFrame with COLUMNS into Bars sorted ascending by date."""
    missing = [c for c in COLUMNS if c not in df.columns]
    if missing:
        raise DataLoadError(f"Missing columns: {', '.join(missing)}")
    df = df.copy()
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    for col in PRICE_COLUMNS + ["volume"]:
        df[col] = pd.to_numeric(df[col], errors="coerce").fillna(0.0)
    valid = df["date"].notna() & (df["close"] > 0)
    dropped = int((~valid).sum())
    if dropped:
        logger.info("Dropped %d rows with invalid date or non-positive close", dropped)
    df = df[valid].sort_values("date", kind="mergesort")
    if df.empty:
        raise DataLoadError("No valid bars in input")
    return [
        Bar(
            date=row.date.date(),
            open=float(row.open),
            high=float(row.high),
            low=float(row.low),
            close=float(row.close),
            volume=int(row.volume),
        )
        for row in df.itertuples(index=False)
    ]


def load_bars_csv(path: Union[str, Path]) -> List[Bar]:
    """Read a CSV file into cleaned, date-ordered Bars."""
    path = Path(path)
    if not path.exists():
        raise DataLoadError(f"CSV not found: {path}")
    try:
        raw = pd.read_csv(path, header=None, dtype=str, skipinitialspace=True, skip_blank_lines=True)
    except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        raise DataLoadError(f"Cannot parse {path}: {e}") from e
    raw = raw.reindex(columns=range(len(COLUMNS)))
    raw.columns = COLUMNS
    bars = bars_from_frame(raw)
    logger.info("Loaded %d bars from %s (%s..%s)", len(bars), path.name, bars[0].date, bars[-1].date)
    return bars
