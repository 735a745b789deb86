"""Dashboard snapshot model: one refresh worth of derived figures."""

from __future__ import annotations

from dataclasses import dataclass, field

from divtracker.models.dividend import DividendEvent
from divtracker.models.history import DividendHistory
from divtracker.models.quote import PriceQuote
from divtracker.models.scenario import ReturnsSummary


@dataclass(frozen=True)
class DashboardSnapshot:
    """Values handed to the display layer after one refresh.

    Attributes:
        quote: Price every derived figure was computed against.
        history: Reconciled history, newest first.
        placeholders: Entries synthesized during this refresh.
        trailing_average: Mean of the trailing 12 periods.
        annualized_yield: Annualized yield percent.
        returns: Scenario returns for the requested investment.
        history_warnings: Messages from failed history quality checks.
    """

    quote: PriceQuote
    history: DividendHistory
    placeholders: list[DividendEvent] = field(default_factory=list)
    trailing_average: float = 0.0
    annualized_yield: float = 0.0
    returns: ReturnsSummary | None = None
    history_warnings: list[str] = field(default_factory=list)

    @property
    def latest(self) -> DividendEvent | None:
        """Newest history entry."""
        return self.history.latest
