"""Data quality validation for dividend histories and quotes."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from divtracker.models.history import DividendHistory
from divtracker.models.quote import PriceQuote

# Stored yields were computed against the price of the day they were recorded.
_YIELD_TOLERANCE_POINTS = 1.0


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]


def validate_history(history: DividendHistory, price: float | None = None) -> ValidationResult:
    """Run all quality checks on a dividend history.

    Checks:
        1. Not empty
        2. Unique periods
        3. Sort order (newest first)
        4. Non-negative, finite amounts
        5. Date order (pay date on or after ex-date)
        6. Yield consistency with ``price`` (skipped when no price given)
    """
    result = ValidationResult()
    events = list(history)

    # 1. Not empty
    if not events:
        result.checks.append(ValidationCheck("not_empty", False, "No dividends provided"))
        return result
    result.checks.append(ValidationCheck("not_empty", True, f"{len(events)} dividends"))

    # 2. Unique periods
    periods = [e.period for e in events]
    dupes = len(periods) - len(set(periods))
    result.checks.append(ValidationCheck(
        "unique_periods", dupes == 0, f"{dupes} duplicate periods" if dupes else "",
    ))

    # 3. Sort order
    out_of_order = sum(
        1 for newer, older in zip(periods, periods[1:]) if newer <= older
    )
    result.checks.append(ValidationCheck(
        "sort_order", out_of_order == 0, f"{out_of_order} out of order" if out_of_order else "",
    ))

    # 4. Amounts
    bad = sum(1 for e in events if e.amount < 0 or math.isnan(e.amount) or math.isinf(e.amount))
    result.checks.append(ValidationCheck(
        "non_negative", bad == 0, f"{bad} negative or non-finite amounts" if bad else "",
    ))

    # 5. Dates
    inverted = sum(
        1 for e in events
        if e.ex_date and e.pay_date and e.pay_date < e.ex_date
    )
    result.checks.append(ValidationCheck(
        "date_order", inverted == 0, f"{inverted} pay dates before ex-date" if inverted else "",
    ))

    # 6. Yields
    if price is not None and price > 0:
        drift = [
            e.label for e in events
            if e.yield_percent is not None
            and abs(e.yield_percent - e.amount / price * 100) > _YIELD_TOLERANCE_POINTS
        ]
        result.checks.append(ValidationCheck(
            "yield_consistency",
            not drift,
            f"Stored yield off by >1 point for {', '.join(drift)}" if drift else "",
        ))

    return result


def validate_quote(quote: PriceQuote) -> bool:
    """Basic quote sanity check.

    Returns True if the current price is a positive finite number and the
    session high is not below the low.
    """
    price = quote.current_price
    if price is None or math.isnan(price) or math.isinf(price) or price <= 0:
        return False
    if quote.high is not None and quote.low is not None and quote.high < quote.low:
        return False
    return True
