"""
EMA crossover: bullish while the fast EMA is strictly above the slow EMA.
BUY on a false -> true transition, SELL on true -> false.
"""

from __future__ import annotations
import logging
from typing import List, Optional, Sequence, Tuple

from ema_backtester.core.errors import InsufficientDataError
from ema_backtester.core.types import Bar, EnrichedBar, SignalEvent, SignalType
from ema_backtester.indicators.ema import check_period, compute_ema
from ema_backtester.strategies.base import BaseStrategy

logger = logging.getLogger("ema_backtester.strategy")


def _aligned(series: List[float], period: int, i: int) -> Optional[float]:
    """EMA value for bar i, or None while the indicator is still warming up."""
    if i < period - 1:
        return None
    return series[i - (period - 1)]


class EmaCrossoverStrategy(BaseStrategy):
    """
    Fast/slow EMA crossover on closes.

    Events are suppressed for the first slow_period + 1 bars. With
    carry_warmup_state=True (default) the previous-signal state is still updated
    on those bars, so a crossover that happened during warm-up produces no event
    afterwards. With False the state starts flat at the first eligible bar.
    """

    def __init__(
        self,
        fast_period: int = 13,
        slow_period: int = 21,
        carry_warmup_state: bool = True,
    ):
        fast_period = check_period(fast_period)
        slow_period = check_period(slow_period)
        if fast_period >= slow_period:
            logger.warning("fast period %d is not shorter than slow period %d", fast_period, slow_period)
        self.fast_period = fast_period
        self.slow_period = slow_period
        # A steady uptrend already has fast > slow on the first bar where both
        # EMAs exist, so with carried state it emits no BUY at all.
        self.carry_warmup_state = carry_warmup_state

    @property
    def warmup_bars(self) -> int:
        """Number of leading bars on which no event is emitted."""
        return self.slow_period + 1

    @property
    def min_bars(self) -> int:
        return max(self.fast_period, self.slow_period) + 2

    def enrich(self, bars: Sequence[Bar]) -> List[EnrichedBar]:
        """Attach both EMAs and the bullish flag to every bar."""
        closes = [b.close for b in bars]
        fast = compute_ema(closes, self.fast_period)
        slow = compute_ema(closes, self.slow_period)
        enriched = []
        for i, bar in enumerate(bars):
            ema_f = _aligned(fast, self.fast_period, i)
            ema_s = _aligned(slow, self.slow_period, i)
            signal = ema_f is not None and ema_s is not None and ema_f > ema_s
            enriched.append(EnrichedBar(bar=bar, ema_fast=ema_f, ema_slow=ema_s, signal=signal))
        return enriched

    def detect_events(self, enriched: Sequence[EnrichedBar]) -> List[SignalEvent]:
        """Scan enriched bars in order and emit one event per signal transition."""
        events: List[SignalEvent] = []
        prev_signal = False
        for i, row in enumerate(enriched):
            if i < self.warmup_bars:
                if self.carry_warmup_state:
                    prev_signal = row.signal
                continue
            if row.signal and not prev_signal:
                events.append(self._event(row, SignalType.BUY))
            elif not row.signal and prev_signal:
                events.append(self._event(row, SignalType.SELL))
            prev_signal = row.signal
        return events

    def derive(self, bars: Sequence[Bar]) -> Tuple[List[EnrichedBar], List[SignalEvent]]:
        if len(bars) < self.min_bars:
            raise InsufficientDataError(self.min_bars, len(bars), what="bars")
        enriched = self.enrich(bars)
        events = self.detect_events(enriched)
        logger.debug(
            "EMA%d/EMA%d over %d bars: %d events",
            self.fast_period, self.slow_period, len(bars), len(events),
        )
        return enriched, events

    @staticmethod
    def _event(row: EnrichedBar, kind: SignalType) -> SignalEvent:
        logger.debug("%s signal on %s at %.4f", kind.value, row.date, row.close)
        return SignalEvent(
            date=row.date,
            type=kind,
            price=row.close,
            ema_fast=row.ema_fast,
            ema_slow=row.ema_slow,
        )


def derive(
    bars: Sequence[Bar],
    fast_period: int = 13,
    slow_period: int = 21,
    carry_warmup_state: bool = True,
) -> Tuple[List[EnrichedBar], List[SignalEvent]]:
    """Functional form of EmaCrossoverStrategy(...).derive(bars)."""
    return EmaCrossoverStrategy(fast_period, slow_period, carry_warmup_state).derive(bars)
