"""Price quote data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class PriceQuote:
    """Point-in-time price observation for the tracked fund.

    Attributes:
        symbol: Ticker symbol.
        current_price: Latest trade price.
        previous_close: Previous session close.
        high: Session high.
        low: Session low.
        timestamp: Observation time.
        is_fallback: Last-known values substituted after every feed failed.
    """

    symbol: str
    current_price: float
    previous_close: float | None = None
    high: float | None = None
    low: float | None = None
    timestamp: datetime | None = None
    is_fallback: bool = False

    @property
    def change(self) -> float | None:
        """Dollar change from previous close."""
        if self.previous_close is None:
            return None
        return self.current_price - self.previous_close

    @property
    def percent_change(self) -> float | None:
        """Percent change from previous close."""
        if not self.previous_close:
            return None
        return (self.current_price - self.previous_close) / self.previous_close * 100
