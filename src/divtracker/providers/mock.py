"""Mock provider for testing and CI; no API keys or network required."""

from __future__ import annotations

from datetime import datetime, timezone

from divtracker.models.dividend import DividendEvent
from divtracker.models.quote import PriceQuote
from divtracker.providers.base import BaseFeedProvider


class MockProvider(BaseFeedProvider):
    """In-memory provider that returns configurable static data.

    Use ``set_quote`` and ``set_dividends`` to pre-load data. Without a
    preset quote, the last-known WNTR close is returned.
    """

    name = "mock"

    def __init__(self) -> None:
        self._quotes: dict[str, PriceQuote] = {}
        self._dividends: dict[str, list[DividendEvent]] = {}

    # --- Pre-load helpers ---

    def set_quote(self, symbol: str, quote: PriceQuote) -> None:
        self._quotes[symbol.upper()] = quote

    def set_dividends(self, symbol: str, events: list[DividendEvent]) -> None:
        self._dividends[symbol.upper()] = sorted(
            events, key=lambda e: e.period, reverse=True,
        )

    # --- Provider implementation ---

    def get_quote(self, symbol: str) -> PriceQuote:
        key = symbol.upper()
        if key in self._quotes:
            return self._quotes[key]
        return PriceQuote(
            symbol=key,
            current_price=36.79,
            previous_close=36.66,
            high=37.05,
            low=36.55,
            timestamp=datetime.now(timezone.utc),
        )

    def get_dividends(self, symbol: str, limit: int = 12) -> list[DividendEvent]:
        return self._dividends.get(symbol.upper(), [])[:limit]

    def capabilities(self) -> set[str]:
        return {"quotes", "dividends"}
