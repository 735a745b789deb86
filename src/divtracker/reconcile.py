"""Dividend reconciliation: synthesize placeholders for due periods.

The due/announcement checks are heuristics. Whatever they add is tagged
``estimated`` or ``announced`` and is replaced once an authoritative entry
for the same period arrives (see ``DividendHistory.supersede``).
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from datetime import date, timedelta

from divtracker.calendar import is_last_week, next_trading_day
from divtracker.config import ReconciliationPolicy
from divtracker.engine import check_price, yield_of
from divtracker.errors import EmptyHistoryError
from divtracker.models.dividend import DividendEvent, Provenance
from divtracker.models.history import DividendHistory
from divtracker.models.period import Period

logger = logging.getLogger(__name__)

DEFAULT_POLICY = ReconciliationPolicy()

SOURCE_NAME = "reconciliation"


@dataclass(frozen=True)
class ReconciliationResult:
    """New history plus the placeholders added to produce it."""

    history: DividendHistory
    added: list[DividendEvent] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.added)


def is_period_present(history: DividendHistory, period: Period) -> bool:
    return history.contains(period)


def is_due(today: date, period: Period, policy: ReconciliationPolicy = DEFAULT_POLICY) -> bool:
    """True once the expected payment day of ``period`` has been reached."""
    return today >= period.day(policy.due_day)


def in_announcement_window(
    today: date,
    period: Period,
    policy: ReconciliationPolicy = DEFAULT_POLICY,
) -> bool:
    """True while ``today`` sits in the pre-ex-date announcement window."""
    ex_date = period.day(policy.ex_day)
    opens = ex_date - timedelta(days=policy.announcement_window_max)
    closes = ex_date - timedelta(days=policy.announcement_window_min)
    return opens <= today <= closes


def weighted_average(history: DividendHistory, weights: tuple[int, ...]) -> float:
    """Weighted mean of the newest ``len(weights)`` amounts, newest first."""
    recent = history.amounts[: len(weights)]
    if not recent:
        raise EmptyHistoryError("weighted_average")
    used = weights[: len(recent)]
    return sum(a * w for a, w in zip(recent, used)) / sum(used)


def synthesize(
    history: DividendHistory,
    period: Period,
    reference_price: float,
    policy: ReconciliationPolicy = DEFAULT_POLICY,
    rng: random.Random | None = None,
    provenance: Provenance = Provenance.ESTIMATED,
) -> DividendEvent:
    """Build one placeholder dividend for ``period``.

    The amount is the weighted recent average times a random factor within
    the policy's jitter bounds, or ``policy.default_amount`` for an empty
    history. Dates follow the policy days, moved to the next trading day.
    """
    if provenance is Provenance.AUTHORITATIVE:
        raise ValueError("Synthesized dividends cannot be authoritative")
    rng = rng or random.Random()

    if history:
        base = weighted_average(history, policy.weights)
        amount = base * rng.uniform(policy.jitter_low, policy.jitter_high)
    else:
        amount = policy.default_amount
    amount = round(amount, 4)

    ex_date = next_trading_day(period.day(policy.ex_day))
    pay_date = max(next_trading_day(period.day(policy.due_day)), ex_date)

    return DividendEvent(
        period=period,
        amount=amount,
        yield_percent=round(yield_of(amount, reference_price), 2),
        ex_date=ex_date,
        pay_date=pay_date,
        provenance=provenance,
        symbol=history.latest.symbol if history else None,
        source=SOURCE_NAME,
    )


def _announcement_fires(policy: ReconciliationPolicy, rng: random.Random) -> bool:
    if policy.deterministic:
        return True
    return rng.random() < policy.announcement_probability


def reconcile_with_report(
    history: DividendHistory,
    today: date,
    reference_price: float,
    policy: ReconciliationPolicy = DEFAULT_POLICY,
    rng: random.Random | None = None,
) -> ReconciliationResult:
    """Add placeholders for the current and, late in the month, next period.

    At most one placeholder per period and two per call. Existing entries
    are never removed or reordered.
    """
    check_price(reference_price)
    rng = rng or random.Random()
    base = history
    added: list[DividendEvent] = []

    current = Period.from_date(today)
    if not is_period_present(history, current):
        if is_due(today, current, policy):
            added.append(synthesize(base, current, reference_price, policy, rng, Provenance.ESTIMATED))
        elif in_announcement_window(today, current, policy) and _announcement_fires(policy, rng):
            added.append(synthesize(base, current, reference_price, policy, rng, Provenance.ANNOUNCED))

    if is_last_week(today, policy.last_week_days):
        upcoming = current.next()
        if (
            not is_period_present(history, upcoming)
            and in_announcement_window(today, upcoming, policy)
            and _announcement_fires(policy, rng)
        ):
            added.append(synthesize(base, upcoming, reference_price, policy, rng, Provenance.ANNOUNCED))

    for event in added:
        history = history.insert(event)
        logger.info(
            "Added %s placeholder for %s: %.4f (%.2f%%)",
            event.provenance.value, event.label, event.amount, event.yield_percent,
        )
    return ReconciliationResult(history=history, added=added)


def reconcile(
    history: DividendHistory,
    today: date,
    reference_price: float,
    policy: ReconciliationPolicy = DEFAULT_POLICY,
    rng: random.Random | None = None,
) -> DividendHistory:
    """Return ``history`` with any newly due placeholders inserted."""
    return reconcile_with_report(history, today, reference_price, policy, rng).history
