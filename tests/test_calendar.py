"""Tests for month arithmetic and NYSE trading days."""

from datetime import date

import pytest

from divtracker.calendar import (
    add_months,
    clamp_day,
    days_in_month,
    is_last_week,
    is_trading_day,
    month_abbreviation,
    month_number,
    next_trading_day,
    nyse_holidays,
)


class TestMonths:
    def test_abbreviation_round_trip(self):
        for m in range(1, 13):
            assert month_number(month_abbreviation(m)) == m

    def test_full_names(self):
        assert month_number("September") == 9
        assert month_number(" dec ") == 12

    def test_bad_names(self):
        with pytest.raises(ValueError):
            month_number("Foo")
        with pytest.raises(ValueError):
            month_abbreviation(13)

    def test_days_in_month(self):
        assert days_in_month(2024, 2) == 29
        assert days_in_month(2025, 2) == 28
        assert days_in_month(2026, 12) == 31
        assert days_in_month(2026, 9) == 30

    def test_add_months_wraps(self):
        assert add_months(2026, 12, 1) == (2027, 1)
        assert add_months(2026, 1, -1) == (2025, 12)
        assert add_months(2026, 10, 11) == (2027, 9)
        assert add_months(2026, 10, -24) == (2024, 10)

    def test_clamp_day(self):
        assert clamp_day(2025, 2, 31) == date(2025, 2, 28)
        assert clamp_day(2025, 3, 10) == date(2025, 3, 10)

    def test_is_last_week(self):
        assert is_last_week(date(2026, 9, 28))
        assert is_last_week(date(2026, 9, 24))
        assert not is_last_week(date(2026, 9, 23))
        assert not is_last_week(date(2026, 10, 12))


class TestTradingDays:
    def test_holidays_2026(self):
        holidays = nyse_holidays(2026)
        assert date(2026, 1, 1) in holidays
        assert date(2026, 1, 19) in holidays   # MLK
        assert date(2026, 4, 3) in holidays    # Good Friday
        assert date(2026, 5, 25) in holidays   # Memorial Day
        assert date(2026, 6, 19) in holidays
        assert date(2026, 7, 3) in holidays    # July 4 observed
        assert date(2026, 9, 7) in holidays    # Labor Day
        assert date(2026, 11, 26) in holidays  # Thanksgiving
        assert date(2026, 12, 25) in holidays

    def test_no_juneteenth_before_2022(self):
        assert date(2021, 6, 18) not in nyse_holidays(2021)

    def test_weekend_not_trading(self):
        assert not is_trading_day(date(2026, 10, 10))
        assert is_trading_day(date(2026, 10, 7))

    def test_next_trading_day(self):
        assert next_trading_day(date(2026, 10, 7)) == date(2026, 10, 7)
        assert next_trading_day(date(2026, 10, 10)) == date(2026, 10, 12)
        assert next_trading_day(date(2026, 11, 7)) == date(2026, 11, 9)
        assert next_trading_day(date(2026, 9, 5)) == date(2026, 9, 8)
