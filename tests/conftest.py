"""Shared fixtures for divtracker tests."""

from __future__ import annotations

import random
import sys
from datetime import date, datetime, timezone
from pathlib import Path

import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from divtracker.models.dividend import DividendEvent, Provenance
from divtracker.models.history import DividendHistory
from divtracker.models.period import Period
from divtracker.models.quote import PriceQuote
from divtracker.providers.mock import MockProvider


class FixedRandom(random.Random):
    """Random source with pinned ``uniform`` and ``random`` results."""

    def __init__(self, factor: float = 1.0, draw: float = 0.0) -> None:
        super().__init__(0)
        self.factor = factor
        self.draw = draw

    def uniform(self, a: float, b: float) -> float:
        return self.factor

    def random(self) -> float:
        return self.draw


def make_event(
    month: str,
    year: int,
    amount: float,
    provenance: Provenance = Provenance.AUTHORITATIVE,
    **kwargs,
) -> DividendEvent:
    return DividendEvent(
        period=Period.of(month, year),
        amount=amount,
        provenance=provenance,
        **kwargs,
    )


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider()


@pytest.fixture
def sample_events() -> list[DividendEvent]:
    """The two published WNTR distributions, newest first."""
    return [
        make_event(
            "Jun", 2025, 3.07, yield_percent=8.34,
            ex_date=date(2025, 6, 5), pay_date=date(2025, 6, 6), symbol="WNTR",
        ),
        make_event(
            "May", 2025, 2.719, yield_percent=7.39,
            ex_date=date(2025, 5, 8), pay_date=date(2025, 5, 9), symbol="WNTR",
        ),
    ]


@pytest.fixture
def sample_history(sample_events) -> DividendHistory:
    return DividendHistory(sample_events)


@pytest.fixture
def sample_quote() -> PriceQuote:
    return PriceQuote(
        symbol="WNTR",
        current_price=36.79,
        previous_close=36.66,
        high=37.05,
        low=36.55,
        timestamp=datetime(2025, 6, 20, 15, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def fixed_rng() -> FixedRandom:
    return FixedRandom()


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(42)
