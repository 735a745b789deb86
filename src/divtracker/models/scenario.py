"""Investment scenario and projection result models."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

AVERAGE_SCENARIO_NAME = "Historical Average"
CUSTOM_SCENARIO_NAME = "Custom Scenario"


class ScenarioMode(Enum):
    """Which monthly dividend a projection assumes."""

    AVERAGE = "average"
    OVERRIDE = "override"


@dataclass(frozen=True)
class InvestmentScenario:
    """User-chosen monthly dividend assumption.

    Attributes:
        mode: ``AVERAGE`` uses the trailing average, ``OVERRIDE`` uses
            ``amount``.
        amount: Monthly dividend per share for ``OVERRIDE``.
        name: Display name.
    """

    mode: ScenarioMode = ScenarioMode.AVERAGE
    amount: float | None = None
    name: str = AVERAGE_SCENARIO_NAME

    def __post_init__(self) -> None:
        if self.mode is ScenarioMode.OVERRIDE:
            if self.amount is None:
                raise ValueError("Override scenario requires an amount")
            if not math.isfinite(self.amount) or self.amount < 0:
                raise ValueError(f"Override amount must be finite and non-negative, got {self.amount}")

    @classmethod
    def average(cls) -> InvestmentScenario:
        return cls()

    @classmethod
    def override(cls, amount: float, name: str | None = None) -> InvestmentScenario:
        return cls(
            mode=ScenarioMode.OVERRIDE,
            amount=float(amount),
            name=name or CUSTOM_SCENARIO_NAME,
        )

    @property
    def is_override(self) -> bool:
        return self.mode is ScenarioMode.OVERRIDE


@dataclass(frozen=True)
class ProjectedReturn:
    """Income for one period at a given share count.

    Attributes:
        label: Period label, e.g. ``"Jun 2025"``.
        dividend: Dividend per share used.
        value: Income, rounded to cents.
        projected: Synthetic future period rather than a historical one.
    """

    label: str
    dividend: float
    value: float
    projected: bool = False


@dataclass(frozen=True)
class ReturnsSummary:
    """Investment return figures for one scenario."""

    scenario_name: str
    is_custom: bool
    shares_owned: float
    effective_dividend: float
    expected_monthly_dividend: float
    expected_annual_dividend: float
    expected_annual_yield_percent: float
    historical_return: float
    monthly_returns: list[ProjectedReturn] = field(default_factory=list)
    projected_returns: list[ProjectedReturn] = field(default_factory=list)
    vs_average_percent: float | None = None
