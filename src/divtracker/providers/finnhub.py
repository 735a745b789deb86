"""Finnhub quote provider.

Supplies the real-time price feed. Install the optional dependency:
    pip install divtracker[finnhub]
"""

from __future__ import annotations

import os
from datetime import datetime, timezone

from divtracker.errors import DividendError, DividendErrorCode
from divtracker.models.quote import PriceQuote
from divtracker.providers.base import BaseFeedProvider

try:
    import finnhub
    _FINNHUB_AVAILABLE = True
except ImportError:
    _FINNHUB_AVAILABLE = False


class FinnhubProvider(BaseFeedProvider):
    """Fetch current quotes from Finnhub.io.

    Capabilities: quotes.
    """

    name = "Finnhub"

    def __init__(self, api_key: str | None = None, client=None) -> None:
        if client is not None:
            self.client = client
            return
        if not _FINNHUB_AVAILABLE:
            raise DividendError(
                "finnhub-python is not installed. Run: pip install divtracker[finnhub]",
                code=DividendErrorCode.PROVIDER_ERROR,
            )

        self.api_key = api_key or os.getenv("FINNHUB_API_KEY")
        if not self.api_key:
            raise DividendError(
                "Finnhub API key required. Set FINNHUB_API_KEY env var or pass api_key.",
                code=DividendErrorCode.AUTH_FAILED,
            )

        self.client = finnhub.Client(api_key=self.api_key)

    def capabilities(self) -> set[str]:
        return {"quotes"}

    def get_quote(self, symbol: str) -> PriceQuote:
        try:
            data = self.client.quote(symbol.upper())
        except Exception as exc:
            raise DividendError(
                f"Finnhub get_quote failed: {exc}",
                code=DividendErrorCode.PROVIDER_ERROR,
                retryable=True,
            ) from exc

        if not data or data.get("error"):
            raise DividendError(
                f"Finnhub API error: {(data or {}).get('error', 'empty response')}",
                code=DividendErrorCode.PROVIDER_ERROR,
                retryable=True,
            )
        # Finnhub answers unknown symbols with an all-zero quote
        if not data.get("c"):
            raise DividendError(
                f"No Finnhub quote for {symbol.upper()}",
                code=DividendErrorCode.NO_DATA,
                retryable=True,
            )

        ts = data.get("t")
        return PriceQuote(
            symbol=symbol.upper(),
            current_price=float(data["c"]),
            previous_close=float(data["pc"]) if data.get("pc") else None,
            high=float(data["h"]) if data.get("h") else None,
            low=float(data["l"]) if data.get("l") else None,
            timestamp=(
                datetime.fromtimestamp(ts, tz=timezone.utc) if ts
                else datetime.now(timezone.utc)
            ),
        )
