"""Abstract strategy: indicators + signal events."""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Sequence, Tuple

from ema_backtester.core.types import Bar, EnrichedBar, SignalEvent


class BaseStrategy(ABC):
    """Strategy enriches a bar series with indicators and emits transition events."""

    @property
    @abstractmethod
    def min_bars(self) -> int:
        """Fewest bars for which derive() can produce a meaningful result."""

    @abstractmethod
    def derive(self, bars: Sequence[Bar]) -> Tuple[List[EnrichedBar], List[SignalEvent]]:
        """Return one EnrichedBar per input bar plus the signal events, in date order."""
        pass
