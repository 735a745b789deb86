"""Dividend tracker models."""

from divtracker.models.period import Period
from divtracker.models.dividend import DividendEvent, Provenance
from divtracker.models.history import DividendHistory
from divtracker.models.quote import PriceQuote
from divtracker.models.scenario import (
    InvestmentScenario,
    ProjectedReturn,
    ReturnsSummary,
    ScenarioMode,
)
from divtracker.models.snapshot import DashboardSnapshot

__all__ = [
    "Period",
    "DividendEvent",
    "Provenance",
    "DividendHistory",
    "PriceQuote",
    "InvestmentScenario",
    "ScenarioMode",
    "ProjectedReturn",
    "ReturnsSummary",
    "DashboardSnapshot",
]
