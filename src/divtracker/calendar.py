"""Month arithmetic and NYSE trading days.

No external dependencies. Month names are fixed English abbreviations so
period labels never depend on the process locale.
"""

from __future__ import annotations

from datetime import date, timedelta

MONTH_ABBREVIATIONS: tuple[str, ...] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_MONTH_NUMBERS = {abbr.lower(): i + 1 for i, abbr in enumerate(MONTH_ABBREVIATIONS)}


# ---- Months ----

def month_abbreviation(month: int) -> str:
    """Three-letter abbreviation for a 1-indexed month."""
    if not 1 <= month <= 12:
        raise ValueError(f"Month out of range: {month}")
    return MONTH_ABBREVIATIONS[month - 1]


def month_number(name: str) -> int:
    """1-indexed month for an abbreviation or full English month name."""
    key = name.strip().lower()[:3]
    if key not in _MONTH_NUMBERS:
        raise ValueError(f"Unknown month: {name!r}")
    return _MONTH_NUMBERS[key]


def days_in_month(year: int, month: int) -> int:
    if month == 12:
        return 31
    return (date(year, month + 1, 1) - date(year, month, 1)).days


def add_months(year: int, month: int, n: int) -> tuple[int, int]:
    """Shift a (year, month) pair by ``n`` months (negative allowed)."""
    index = year * 12 + (month - 1) + n
    return index // 12, index % 12 + 1


def clamp_day(year: int, month: int, day: int) -> date:
    """Date for ``day`` in the month, clamped to the month's last day."""
    return date(year, month, min(day, days_in_month(year, month)))


def is_last_week(d: date, days: int = 7) -> bool:
    """True when ``d`` falls within the final ``days`` days of its month."""
    return days_in_month(d.year, d.month) - d.day < days


# ---- NYSE holidays ----

def _observed(d: date) -> date:
    """Weekend holiday observed on the adjacent weekday."""
    if d.weekday() == 5:
        return d - timedelta(days=1)
    if d.weekday() == 6:
        return d + timedelta(days=1)
    return d


def _nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
    """nth occurrence (1-indexed) of a weekday; ``n=-1`` for the last one."""
    if n > 0:
        first = date(year, month, 1)
        return first + timedelta(days=(weekday - first.weekday()) % 7, weeks=n - 1)
    last = date(year, month, days_in_month(year, month))
    return last - timedelta(days=(last.weekday() - weekday) % 7)


def _easter(year: int) -> date:
    """Gregorian Easter Sunday (anonymous algorithm)."""
    a = year % 19
    b, c = divmod(year, 100)
    d, e = divmod(b, 4)
    f = (b + 8) // 25
    g = (b - f + 1) // 3
    h = (19 * a + b - d - g + 15) % 30
    i, k = divmod(c, 4)
    l = (32 + 2 * e + 2 * i - h - k) % 7  # noqa: E741
    m = (a + 11 * h + 22 * l) // 451
    month, day = divmod(h + l - 7 * m + 114, 31)
    return date(year, month, day + 1)


def nyse_holidays(year: int) -> set[date]:
    """Full-day NYSE closures for a year."""
    holidays = {
        date(year, 1, 1) + timedelta(days=1) if date(year, 1, 1).weekday() == 6 else date(year, 1, 1),
        _nth_weekday(year, 1, 0, 3),   # MLK Day
        _nth_weekday(year, 2, 0, 3),   # Presidents Day
        _easter(year) - timedelta(days=2),  # Good Friday
        _nth_weekday(year, 5, 0, -1),  # Memorial Day
        _observed(date(year, 7, 4)),
        _nth_weekday(year, 9, 0, 1),   # Labor Day
        _nth_weekday(year, 11, 3, 4),  # Thanksgiving
        _observed(date(year, 12, 25)),
    }
    if year >= 2022:
        holidays.add(_observed(date(year, 6, 19)))
    return holidays


def is_trading_day(d: date) -> bool:
    """Weekday that is not an NYSE holiday."""
    return d.weekday() < 5 and d not in nyse_holidays(d.year)


def next_trading_day(d: date) -> date:
    """``d`` itself when it is a trading day, else the following one."""
    while not is_trading_day(d):
        d += timedelta(days=1)
    return d
