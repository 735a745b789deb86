"""Yield and projection engine.

Stateless functions over a dividend history, a price and a scenario.
Nothing here mutates its inputs, so the same inputs always give the same
outputs and the whole set can be recomputed on every refresh.
"""

from __future__ import annotations

import math
from datetime import date

from divtracker.errors import EmptyHistoryError, InvalidPriceError
from divtracker.models.history import DividendHistory
from divtracker.models.period import Period
from divtracker.models.quote import PriceQuote
from divtracker.models.scenario import (
    InvestmentScenario,
    ProjectedReturn,
    ReturnsSummary,
)

TRAILING_PERIODS = 12
PROJECTION_PERIODS = 12

BULLISH_FACTOR = 1.5
BEARISH_FACTOR = 0.5


def check_price(price: float | None) -> float:
    """Return ``price`` as a float, rejecting missing, non-finite or non-positive values."""
    if price is None or not math.isfinite(price) or price <= 0:
        raise InvalidPriceError(price)
    return float(price)


def yield_of(amount: float, price: float | None) -> float:
    """Dividend yield in percent: ``amount / price * 100``."""
    return amount / check_price(price) * 100


def shares_for(investment_amount: float, price: float | None) -> float:
    """Number of shares an investment buys at ``price``."""
    if investment_amount < 0:
        raise ValueError(f"Investment amount must be non-negative, got {investment_amount}")
    return investment_amount / check_price(price)


def trailing_average(history: DividendHistory, window: int | None = None) -> float:
    """Mean of the ``window`` newest amounts.

    ``window`` defaults to ``min(12, len(history))`` and is clamped to the
    history length. Entries are taken in history order, so calendar gaps
    are not detected.
    """
    if not history:
        raise EmptyHistoryError("trailing_average")
    if window is None:
        window = TRAILING_PERIODS
    if window < 1:
        raise ValueError(f"window must be >= 1, got {window}")
    amounts = history.amounts[:window]
    return sum(amounts) / len(amounts)


def annualized_yield(history: DividendHistory, price: float | None) -> float:
    """Trailing-12 income scaled to a full year, as a percent of price.

    Shorter histories are extrapolated: ``sum * 12 / n / price * 100``.
    """
    price = check_price(price)
    if not history:
        raise EmptyHistoryError("annualized_yield")
    amounts = history.amounts[:TRAILING_PERIODS]
    annual = sum(amounts) * (12 / len(amounts))
    return annual / price * 100


def project_returns(
    history: DividendHistory,
    shares_owned: float,
    scenario: InvestmentScenario,
    today: date,
) -> list[ProjectedReturn]:
    """Per-period income for ``shares_owned`` under ``scenario``.

    Average scenarios map every history entry, newest first. Override
    scenarios produce exactly 12 future periods starting at ``today``'s
    month, whatever the history holds.
    """
    if not scenario.is_override:
        return [
            ProjectedReturn(
                label=e.label,
                dividend=e.amount,
                value=round(e.amount * shares_owned, 2),
            )
            for e in history
        ]

    amount = float(scenario.amount)  # type: ignore[arg-type]
    start = Period.from_date(today)
    return [
        ProjectedReturn(
            label=start.shift(i).label,
            dividend=amount,
            value=round(amount * shares_owned, 2),
            projected=True,
        )
        for i in range(PROJECTION_PERIODS)
    ]


# ---- Preset scenarios ----

def bullish(history: DividendHistory) -> InvestmentScenario:
    """Trailing average raised by 50%."""
    return InvestmentScenario.override(
        trailing_average(history) * BULLISH_FACTOR, "Bullish Scenario (+50%)",
    )


def bearish(history: DividendHistory) -> InvestmentScenario:
    """Trailing average cut by 50%."""
    return InvestmentScenario.override(
        trailing_average(history) * BEARISH_FACTOR, "Bearish Scenario (-50%)",
    )


def peak(history: DividendHistory) -> InvestmentScenario:
    """Highest dividend on record."""
    if not history:
        raise EmptyHistoryError("peak")
    return InvestmentScenario.override(max(history.amounts), "Peak Performance")


def minimum(history: DividendHistory) -> InvestmentScenario:
    """Lowest dividend on record."""
    if not history:
        raise EmptyHistoryError("minimum")
    return InvestmentScenario.override(min(history.amounts), "Minimum Performance")


def reset(history: DividendHistory | None = None) -> InvestmentScenario:
    """Drop any override and go back to the trailing average."""
    return InvestmentScenario.average()


PRESETS = {
    "bullish": bullish,
    "bearish": bearish,
    "peak": peak,
    "highest": peak,
    "minimum": minimum,
    "lowest": minimum,
    "reset": reset,
}


def apply_preset(name: str, history: DividendHistory) -> InvestmentScenario:
    """Build a preset scenario by name."""
    try:
        preset = PRESETS[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f"Unknown scenario preset {name!r}. Valid: {sorted(PRESETS)}"
        ) from None
    return preset(history)


# ---- Returns calculator ----

def calculate_returns(
    history: DividendHistory,
    quote: PriceQuote,
    investment_amount: float,
    scenario: InvestmentScenario,
    today: date,
) -> ReturnsSummary:
    """Income figures for ``investment_amount`` bought at the quoted price."""
    price = check_price(quote.current_price)
    shares = shares_for(investment_amount, price)

    if scenario.is_override:
        average = trailing_average(history) if history else None
        effective = float(scenario.amount)  # type: ignore[arg-type]
    else:
        average = trailing_average(history)
        effective = average

    monthly = effective * shares
    window = history.amounts[:TRAILING_PERIODS]

    vs_average = None
    if scenario.is_override and average:
        vs_average = (effective / average) * 100 - 100

    return ReturnsSummary(
        scenario_name=scenario.name,
        is_custom=scenario.is_override,
        shares_owned=shares,
        effective_dividend=effective,
        expected_monthly_dividend=monthly,
        expected_annual_dividend=monthly * 12,
        expected_annual_yield_percent=effective * 12 / price * 100,
        historical_return=sum(window) * shares,
        monthly_returns=project_returns(history, shares, InvestmentScenario.average(), today),
        projected_returns=(
            project_returns(history, shares, scenario, today) if scenario.is_override else []
        ),
        vs_average_percent=vs_average,
    )
