"""Abstract base class for price and dividend feed providers."""

from __future__ import annotations

from abc import ABC

from divtracker.models.dividend import DividendEvent
from divtracker.models.quote import PriceQuote


class BaseFeedProvider(ABC):
    """Abstract base for all feed providers.

    Every method defaults to ``NotImplementedError``; providers implement
    only the feeds they support and advertise them via ``capabilities()``.
    """

    name: str = "base"

    def get_quote(self, symbol: str) -> PriceQuote:
        """Get the current price quote for a symbol."""
        raise NotImplementedError

    def get_dividends(self, symbol: str, limit: int = 12) -> list[DividendEvent]:
        """Get recent authoritative dividends, newest first.

        Args:
            symbol: Ticker symbol.
            limit: Maximum number of events to return.
        """
        raise NotImplementedError

    def get_latest_dividend(self, symbol: str) -> DividendEvent | None:
        """Most recent dividend, or None when the feed has none."""
        events = self.get_dividends(symbol, limit=1)
        return events[0] if events else None

    def capabilities(self) -> set[str]:
        """Return the set of supported feeds: ``quotes``, ``dividends``."""
        return set()
