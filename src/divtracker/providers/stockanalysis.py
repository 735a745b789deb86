"""StockAnalysis.com dividend scraper.

Reads the dividend table on the fund's public dividend page. Used as a
backup when no API-backed dividend feed is configured.
"""

from __future__ import annotations

import logging
import re
from datetime import date, datetime

import requests
from bs4 import BeautifulSoup

from divtracker.errors import DividendError, DividendErrorCode
from divtracker.models.dividend import DividendEvent, Provenance
from divtracker.models.period import Period
from divtracker.providers.base import BaseFeedProvider

logger = logging.getLogger(__name__)

URL_TEMPLATE = "https://stockanalysis.com/etf/{symbol}/dividend/"

UA = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.9",
}

_DATE_FORMATS = ("%b %d, %Y", "%B %d, %Y", "%Y-%m-%d", "%m/%d/%Y")


def parse_date(text: str | None) -> date | None:
    """Parse the date formats the table uses; None for blanks or n/a."""
    t = re.sub(r"\s+", " ", (text or "")).strip()
    if not t or t.lower() in {"n/a", "-", "--"}:
        return None
    for fmt in _DATE_FORMATS:
        try:
            return datetime.strptime(t, fmt).date()
        except ValueError:
            continue
    return None


def parse_amount(text: str | None) -> float | None:
    t = re.sub(r"[^0-9.\-]", "", (text or "").replace(",", ""))
    if not t:
        return None
    try:
        return float(t)
    except ValueError:
        return None


class StockAnalysisProvider(BaseFeedProvider):
    """Scrape declared dividends from StockAnalysis.com.

    Capabilities: dividends.
    """

    name = "StockAnalysis.com"

    def __init__(
        self,
        url: str | None = None,
        session: requests.Session | None = None,
        timeout: float = 15.0,
    ) -> None:
        self.url = url
        self.session = session or requests.Session()
        self.timeout = timeout

    def capabilities(self) -> set[str]:
        return {"dividends"}

    def get_dividends(self, symbol: str, limit: int = 12) -> list[DividendEvent]:
        url = self.url or URL_TEMPLATE.format(symbol=symbol.lower())
        try:
            resp = self.session.get(url, headers=UA, timeout=self.timeout)
        except requests.Timeout as exc:
            raise DividendError(
                f"StockAnalysis request timed out: {exc}",
                code=DividendErrorCode.TIMEOUT,
                retryable=True,
            ) from exc
        except requests.RequestException as exc:
            raise DividendError(
                f"StockAnalysis request failed: {exc}",
                code=DividendErrorCode.PROVIDER_ERROR,
                retryable=True,
            ) from exc

        if resp.status_code == 404:
            raise DividendError(
                f"No StockAnalysis page for {symbol.upper()}",
                code=DividendErrorCode.NOT_FOUND,
            )
        if resp.status_code == 429:
            raise DividendError(
                "StockAnalysis rate limited",
                code=DividendErrorCode.RATE_LIMITED,
                retryable=True,
            )
        if resp.status_code >= 400:
            raise DividendError(
                f"StockAnalysis returned HTTP {resp.status_code}",
                code=DividendErrorCode.PROVIDER_ERROR,
                retryable=True,
            )

        return self.parse_table(resp.text, symbol)[:limit]

    def parse_table(self, html: str, symbol: str) -> list[DividendEvent]:
        """Extract dividend rows from the page HTML, newest first.

        Expected columns: ex-dividend date, cash amount, record date, pay
        date. Rows that do not parse are skipped.
        """
        soup = BeautifulSoup(html, "html.parser")
        table = soup.find("table")
        if table is None:
            raise DividendError(
                f"No dividend table on StockAnalysis page for {symbol.upper()}",
                code=DividendErrorCode.PARSE_FAILED,
                retryable=True,
            )

        events: list[DividendEvent] = []
        for row in table.find_all("tr"):
            cells = [c.get_text(" ", strip=True) for c in row.find_all("td")]
            if len(cells) < 2:
                continue
            ex_date = parse_date(cells[0])
            amount = parse_amount(cells[1])
            if ex_date is None or amount is None or amount < 0:
                logger.debug("Skipping unparsable dividend row: %s", cells)
                continue
            pay_date = parse_date(cells[3]) if len(cells) > 3 else None
            if pay_date is not None and pay_date < ex_date:
                pay_date = None
            events.append(DividendEvent(
                period=Period.from_date(ex_date),
                amount=amount,
                ex_date=ex_date,
                pay_date=pay_date,
                provenance=Provenance.AUTHORITATIVE,
                symbol=symbol.upper(),
                source=self.name,
            ))

        events.sort(key=lambda e: e.ex_date, reverse=True)
        return events
