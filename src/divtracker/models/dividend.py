"""Dividend event data model."""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from datetime import date
from enum import Enum

from divtracker.models.period import Period


class Provenance(Enum):
    """Where a dividend entry came from."""

    AUTHORITATIVE = "authoritative"
    ESTIMATED = "estimated"
    ANNOUNCED = "announced"


@dataclass(frozen=True)
class DividendEvent:
    """One declared (or placeholder) monthly distribution.

    Attributes:
        period: Payout period; at most one event per period in a history.
        amount: Dividend amount per share.
        yield_percent: ``amount / reference price * 100`` at the time the
            entry was recorded.
        ex_date: Ex-dividend date.
        pay_date: Payment date.
        provenance: Authoritative feed entry or synthesized placeholder.
        symbol: Ticker symbol.
        source: Name of the feed that produced the entry.
    """

    period: Period
    amount: float
    yield_percent: float | None = None
    ex_date: date | None = None
    pay_date: date | None = None
    provenance: Provenance = Provenance.AUTHORITATIVE
    symbol: str | None = None
    source: str | None = None

    def __post_init__(self) -> None:
        if not math.isfinite(self.amount) or self.amount < 0:
            raise ValueError(f"Dividend amount must be finite and non-negative, got {self.amount}")
        if self.ex_date and self.pay_date and self.pay_date < self.ex_date:
            raise ValueError(
                f"Pay date {self.pay_date} precedes ex-date {self.ex_date}"
            )

    @property
    def label(self) -> str:
        return self.period.label

    @property
    def is_placeholder(self) -> bool:
        return self.provenance is not Provenance.AUTHORITATIVE

    def with_yield(self, price: float | None) -> DividendEvent:
        """Copy with ``yield_percent`` recomputed against ``price``."""
        from divtracker.engine import yield_of

        return replace(self, yield_percent=round(yield_of(self.amount, price), 2))
