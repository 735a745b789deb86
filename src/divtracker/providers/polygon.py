"""Polygon.io dividend provider.

Supports both the official ``polygon-api-client`` SDK and a direct REST
fallback using ``requests``.

Install the optional dependency:
    pip install divtracker[polygon]
"""

from __future__ import annotations

import os
from datetime import date
from typing import Any

import requests

from divtracker.errors import DividendError, DividendErrorCode
from divtracker.models.dividend import DividendEvent, Provenance
from divtracker.models.period import Period
from divtracker.providers.base import BaseFeedProvider

try:
    from polygon import RESTClient
    _SDK_AVAILABLE = True
except ImportError:
    _SDK_AVAILABLE = False


def _opt_date(value: Any) -> date | None:
    return date.fromisoformat(value) if value else None


class PolygonProvider(BaseFeedProvider):
    """Fetch declared dividends from Polygon.io.

    Capabilities: dividends.
    """

    name = "Polygon.io"
    base_url = "https://api.polygon.io"

    def __init__(
        self,
        api_key: str | None = None,
        session: requests.Session | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.api_key = api_key or os.getenv("POLYGON_API_KEY")
        if not self.api_key:
            raise DividendError(
                "Polygon API key required. Set POLYGON_API_KEY env var or pass api_key.",
                code=DividendErrorCode.AUTH_FAILED,
            )
        self.timeout = timeout

        if _SDK_AVAILABLE and session is None:
            self.client: Any = RESTClient(self.api_key)
        else:
            self.client = None
            if session is None:
                session = requests.Session()
                try:
                    import certifi
                    session.verify = certifi.where()
                except ImportError:
                    pass
            self.session = session

    def capabilities(self) -> set[str]:
        return {"dividends"}

    def get_dividends(self, symbol: str, limit: int = 12) -> list[DividendEvent]:
        try:
            if self.client is not None:
                records = self._dividends_sdk(symbol, limit)
            else:
                records = self._dividends_rest(symbol, limit)
            events = [self._to_event(symbol, r) for r in records if r.get("ex_dividend_date")]
        except DividendError:
            raise
        except requests.Timeout as exc:
            raise DividendError(
                f"Polygon get_dividends timed out: {exc}",
                code=DividendErrorCode.TIMEOUT,
                retryable=True,
            ) from exc
        except Exception as exc:
            raise DividendError(
                f"Polygon get_dividends failed: {exc}",
                code=DividendErrorCode.PROVIDER_ERROR,
                retryable=True,
            ) from exc
        events.sort(key=lambda e: e.ex_date, reverse=True)
        return events[:limit]

    def _dividends_sdk(self, symbol: str, limit: int) -> list[dict[str, Any]]:
        records: list[dict[str, Any]] = []
        for d in self.client.list_dividends(ticker=symbol.upper(), limit=limit):
            records.append({
                "ex_dividend_date": getattr(d, "ex_dividend_date", None),
                "pay_date": getattr(d, "pay_date", None),
                "cash_amount": getattr(d, "cash_amount", None),
            })
            if len(records) >= limit:
                break
        return records

    def _dividends_rest(self, symbol: str, limit: int) -> list[dict[str, Any]]:
        resp = self.session.get(
            f"{self.base_url}/v3/reference/dividends",
            params={
                "apiKey": self.api_key,
                "ticker": symbol.upper(),
                "limit": limit,
                "order": "desc",
                "sort": "ex_dividend_date",
            },
            timeout=self.timeout,
        )
        self._check_response(resp)
        return list(resp.json().get("results", []))

    def _to_event(self, symbol: str, record: dict[str, Any]) -> DividendEvent:
        ex_date = date.fromisoformat(record["ex_dividend_date"])
        pay_date = _opt_date(record.get("pay_date"))
        if pay_date is not None and pay_date < ex_date:
            pay_date = None
        return DividendEvent(
            period=Period.from_date(ex_date),
            amount=float(record.get("cash_amount") or 0.0),
            ex_date=ex_date,
            pay_date=pay_date,
            provenance=Provenance.AUTHORITATIVE,
            symbol=symbol.upper(),
            source=self.name,
        )

    def _check_response(self, resp: Any) -> None:
        if resp.status_code == 429:
            raise DividendError(
                "Polygon rate limited",
                code=DividendErrorCode.RATE_LIMITED,
                retryable=True,
            )
        if resp.status_code in (401, 403):
            raise DividendError(
                "Polygon authentication failed",
                code=DividendErrorCode.AUTH_FAILED,
            )
        if resp.status_code == 404:
            raise DividendError(
                "Symbol not found on Polygon",
                code=DividendErrorCode.NOT_FOUND,
            )
        resp.raise_for_status()
