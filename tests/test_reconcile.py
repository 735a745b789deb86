"""Tests for placeholder reconciliation."""

from datetime import date

import pytest

from conftest import FixedRandom, make_event
from divtracker.config import ReconciliationPolicy
from divtracker.errors import EmptyHistoryError, InvalidPriceError
from divtracker.models.dividend import Provenance
from divtracker.models.history import DividendHistory
from divtracker.models.period import Period
from divtracker.reconcile import (
    in_announcement_window,
    is_due,
    is_period_present,
    reconcile,
    reconcile_with_report,
    synthesize,
    weighted_average,
)

OCT_2026 = Period(2026, 10)
SEP_2026 = Period(2026, 9)
PRICE = 36.79


class TestPredicates:
    def test_is_due(self):
        assert is_due(date(2026, 10, 10), OCT_2026)
        assert is_due(date(2026, 10, 31), OCT_2026)
        assert not is_due(date(2026, 10, 9), OCT_2026)

    def test_is_due_custom_policy(self):
        policy = ReconciliationPolicy(due_day=15)
        assert not is_due(date(2026, 10, 14), OCT_2026, policy)
        assert is_due(date(2026, 10, 15), OCT_2026, policy)

    def test_announcement_window_bounds(self):
        assert in_announcement_window(date(2026, 9, 25), OCT_2026)
        assert in_announcement_window(date(2026, 10, 4), OCT_2026)
        assert not in_announcement_window(date(2026, 9, 24), OCT_2026)
        assert not in_announcement_window(date(2026, 10, 5), OCT_2026)

    def test_is_period_present(self, sample_history):
        assert is_period_present(sample_history, Period(2025, 6))
        assert not is_period_present(sample_history, OCT_2026)


class TestWeightedAverage:
    def test_two_entries(self, sample_history):
        assert weighted_average(sample_history, (6, 5, 4, 3, 2, 1)) == pytest.approx(32.015 / 11)

    def test_only_newest_six_count(self):
        start = Period(2026, 8)
        history = DividendHistory(
            make_event(start.shift(-i).abbreviation, start.shift(-i).year, 1.0 if i < 6 else 50.0)
            for i in range(8)
        )
        assert weighted_average(history, (6, 5, 4, 3, 2, 1)) == pytest.approx(1.0)

    def test_empty(self):
        with pytest.raises(EmptyHistoryError):
            weighted_average(DividendHistory(), (6, 5))


class TestSynthesize:
    def test_dates_roll_to_trading_days(self, sample_history, fixed_rng):
        event = synthesize(sample_history, OCT_2026, PRICE, rng=fixed_rng)
        assert event.ex_date == date(2026, 10, 7)
        # Oct 10 2026 is a Saturday
        assert event.pay_date == date(2026, 10, 12)
        assert event.ex_date <= event.pay_date

    def test_labor_day_ex_date(self, sample_history, fixed_rng):
        event = synthesize(sample_history, SEP_2026, PRICE, rng=fixed_rng)
        assert event.ex_date == date(2026, 9, 8)
        assert event.pay_date == date(2026, 9, 10)

    def test_amount_and_yield(self, sample_history, fixed_rng):
        event = synthesize(sample_history, OCT_2026, PRICE, rng=fixed_rng)
        assert event.amount == 2.9105
        assert event.yield_percent == round(2.9105 / PRICE * 100, 2)
        assert event.provenance is Provenance.ESTIMATED
        assert event.symbol == "WNTR"
        assert event.source == "reconciliation"

    @pytest.mark.parametrize("factor", [0.75, 1.25])
    def test_jitter_bounds_applied(self, sample_history, factor):
        event = synthesize(sample_history, OCT_2026, PRICE, rng=FixedRandom(factor=factor))
        assert event.amount == round(32.015 / 11 * factor, 4)

    def test_random_amount_within_bounds(self, sample_history, seeded_rng):
        base = 32.015 / 11
        for _ in range(50):
            event = synthesize(sample_history, OCT_2026, PRICE, rng=seeded_rng)
            assert base * 0.75 - 1e-4 <= event.amount <= base * 1.25 + 1e-4

    def test_empty_history_uses_default(self, fixed_rng):
        event = synthesize(DividendHistory(), OCT_2026, PRICE, rng=fixed_rng)
        assert event.amount == 2.0
        assert event.symbol is None

    @pytest.mark.parametrize("price", [0, float("nan"), float("inf")])
    def test_invalid_price(self, sample_history, fixed_rng, price):
        with pytest.raises(InvalidPriceError):
            synthesize(sample_history, OCT_2026, price, rng=fixed_rng)

    def test_rejects_authoritative(self, sample_history, fixed_rng):
        with pytest.raises(ValueError):
            synthesize(sample_history, OCT_2026, PRICE, rng=fixed_rng, provenance=Provenance.AUTHORITATIVE)


class TestReconcile:
    def test_due_period_gets_estimate(self, sample_history, fixed_rng):
        result = reconcile_with_report(sample_history, date(2026, 10, 12), PRICE, rng=fixed_rng)
        assert len(result.added) == 1
        added = result.added[0]
        assert added.period == OCT_2026
        assert added.provenance is Provenance.ESTIMATED
        assert result.history.latest == added
        assert list(result.history)[1:] == list(sample_history)

    def test_announcement_deterministic(self, sample_history, fixed_rng):
        policy = ReconciliationPolicy(deterministic=True)
        history = reconcile(sample_history, date(2026, 10, 2), PRICE, policy, FixedRandom(draw=0.99))
        assert len(history) == 3
        assert history.latest.period == OCT_2026
        assert history.latest.provenance is Provenance.ANNOUNCED

    def test_announcement_not_fired(self, sample_history):
        result = reconcile_with_report(
            sample_history, date(2026, 10, 2), PRICE, rng=FixedRandom(draw=0.99),
        )
        assert not result.changed
        assert result.history == sample_history

    def test_announcement_fired_by_draw(self, sample_history):
        result = reconcile_with_report(
            sample_history, date(2026, 10, 2), PRICE, rng=FixedRandom(draw=0.1),
        )
        assert [e.provenance for e in result.added] == [Provenance.ANNOUNCED]

    def test_outside_window_not_due(self, sample_history, fixed_rng):
        result = reconcile_with_report(sample_history, date(2026, 10, 6), PRICE, rng=fixed_rng)
        assert not result.changed

    def test_last_week_adds_current_and_next(self, sample_history, fixed_rng):
        result = reconcile_with_report(sample_history, date(2026, 9, 28), PRICE, rng=fixed_rng)
        assert [e.period for e in result.added] == [SEP_2026, OCT_2026]
        assert [e.provenance for e in result.added] == [Provenance.ESTIMATED, Provenance.ANNOUNCED]
        assert result.history.periods[:2] == [OCT_2026, SEP_2026]
        assert len(result.history) == 4

    def test_present_period_untouched(self, sample_history, fixed_rng):
        history = sample_history.insert(make_event("Oct", 2026, 2.5))
        result = reconcile_with_report(history, date(2026, 10, 12), PRICE, rng=fixed_rng)
        assert not result.changed
        assert result.history is history

    def test_idempotent(self, sample_history, fixed_rng):
        once = reconcile(sample_history, date(2026, 9, 28), PRICE, rng=fixed_rng)
        twice = reconcile(once, date(2026, 9, 28), PRICE, rng=fixed_rng)
        assert twice == once

    def test_repeated_calls_never_duplicate(self, sample_history, seeded_rng):
        history = sample_history
        for _ in range(20):
            history = reconcile(history, date(2026, 10, 2), PRICE, rng=seeded_rng)
        assert len(set(history.periods)) == len(history)
        assert len(history) <= len(sample_history) + 1

    def test_never_removes_entries(self, sample_history, seeded_rng):
        start = date(2026, 9, 1)
        history = sample_history
        for offset in range(60):
            today = date.fromordinal(start.toordinal() + offset)
            before = list(history)
            history = reconcile(history, today, PRICE, rng=seeded_rng)
            assert all(history.contains(e.period) for e in before)
            assert len(history) - len(before) <= 2

    def test_empty_history(self, fixed_rng):
        result = reconcile_with_report(DividendHistory(), date(2026, 10, 12), PRICE, rng=fixed_rng)
        assert result.history.latest.amount == 2.0

    @pytest.mark.parametrize("price", [-1.0, float("nan"), float("inf")])
    def test_invalid_price(self, sample_history, fixed_rng, price):
        with pytest.raises(InvalidPriceError):
            reconcile(sample_history, date(2026, 10, 12), price, rng=fixed_rng)
