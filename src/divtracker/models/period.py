"""Dividend payout period (month, year)."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date

from divtracker.calendar import add_months, clamp_day, month_abbreviation, month_number

_LABEL_RE = re.compile(r"^\s*([A-Za-z]+)\.?\s*,?\s*(\d{4})\s*$")


@dataclass(frozen=True, order=True)
class Period:
    """One monthly payout cycle; natural key of a dividend history.

    Ordered by ``(year, month)``.

    Attributes:
        year: Four-digit year.
        month: Month number, 1-12.
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month out of range: {self.month}")
        if not 1000 <= self.year <= 9999:
            raise ValueError(f"Year must have four digits: {self.year}")

    @classmethod
    def of(cls, month: str, year: int) -> Period:
        """Build from a month abbreviation, e.g. ``Period.of("Jun", 2025)``."""
        return cls(year=int(year), month=month_number(month))

    @classmethod
    def from_date(cls, d: date) -> Period:
        return cls(year=d.year, month=d.month)

    @classmethod
    def parse(cls, label: str) -> Period:
        """Parse a ``"Jun 2025"`` style label."""
        match = _LABEL_RE.match(label)
        if not match:
            raise ValueError(f"Not a period label: {label!r}")
        return cls.of(match.group(1), int(match.group(2)))

    @property
    def abbreviation(self) -> str:
        return month_abbreviation(self.month)

    @property
    def label(self) -> str:
        return f"{self.abbreviation} {self.year}"

    def shift(self, n: int) -> Period:
        year, month = add_months(self.year, self.month, n)
        return Period(year=year, month=month)

    def next(self) -> Period:
        return self.shift(1)

    def previous(self) -> Period:
        return self.shift(-1)

    def day(self, day: int) -> date:
        """Date of ``day`` within the period, clamped to the month length."""
        return clamp_day(self.year, self.month, day)

    def __str__(self) -> str:
        return self.label
