"""Dividend tracker configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class FeedProviderType(Enum):
    """Supported price/dividend feed backends."""

    FINNHUB = "finnhub"
    POLYGON = "polygon"
    STOCKANALYSIS = "stockanalysis"
    MOCK = "mock"


@dataclass(frozen=True)
class ReconciliationPolicy:
    """Heuristics used to decide when a placeholder dividend is due.

    Attributes:
        ex_day: Assumed ex-dividend day of month.
        due_day: Expected payment day of month; past it the period is due.
        announcement_window_min: Fewest days before ``ex_day`` that count
            as the announcement window.
        announcement_window_max: Most days before ``ex_day`` that count
            as the announcement window.
        announcement_probability: Chance that an in-window check
            synthesizes an "announced" placeholder.
        jitter_low: Lower bound of the random factor applied to the
            weighted average.
        jitter_high: Upper bound of the random factor.
        weights: Weights for the most recent entries, newest first.
        default_amount: Amount used when there is no history to average.
        last_week_days: Days at the end of a month during which the next
            period is checked too.
        deterministic: Always synthesize when in the announcement window.
    """

    ex_day: int = 7
    due_day: int = 10
    announcement_window_min: int = 3
    announcement_window_max: int = 12
    announcement_probability: float = 0.3
    jitter_low: float = 0.75
    jitter_high: float = 1.25
    weights: tuple[int, ...] = (6, 5, 4, 3, 2, 1)
    default_amount: float = 2.0
    last_week_days: int = 7
    deterministic: bool = False

    def __post_init__(self) -> None:
        for name in ("ex_day", "due_day"):
            day = getattr(self, name)
            if not 1 <= day <= 31:
                raise ValueError(f"{name} must be between 1 and 31, got {day}")
        if not 0 <= self.announcement_window_min <= self.announcement_window_max:
            raise ValueError("announcement window must satisfy 0 <= min <= max")
        if not 0.0 <= self.announcement_probability <= 1.0:
            raise ValueError("announcement_probability must be within [0, 1]")
        if not 0.0 < self.jitter_low <= self.jitter_high:
            raise ValueError("jitter bounds must satisfy 0 < low <= high")
        if not self.weights or any(w <= 0 for w in self.weights):
            raise ValueError("weights must be a non-empty tuple of positive numbers")
        if self.default_amount < 0:
            raise ValueError("default_amount must be non-negative")
        if self.last_week_days < 1:
            raise ValueError("last_week_days must be >= 1")


@dataclass
class DashboardConfig:
    """Configuration for DividendDashboard.

    Attributes:
        symbol: Fund ticker tracked by the dashboard.
        providers: Feed backends ordered by priority.
        store_backend: History store type: "parquet", "memory", or "none".
        store_dir: Directory for parquet history files.
        validate: Whether to run quality checks on fetched quotes.
        fallback_quote: Last-known (price, previous close, high, low) used
            when every quote provider fails. ``None`` disables it.
        finnhub_api_key: Finnhub API key.
        polygon_api_key: Polygon.io API key.
        stockanalysis_url: Dividend page to scrape; defaults to the
            symbol's ETF page.
        request_timeout: HTTP timeout in seconds for scraping providers.
        policy: Placeholder reconciliation heuristics.
    """

    symbol: str = "WNTR"
    providers: list[FeedProviderType] = field(
        default_factory=lambda: [FeedProviderType.FINNHUB, FeedProviderType.POLYGON]
    )
    store_backend: str = "parquet"
    store_dir: str = "data/dividends"
    validate: bool = True
    fallback_quote: tuple[float, float, float, float] | None = (36.79, 36.66, 37.05, 36.55)

    finnhub_api_key: str | None = None
    polygon_api_key: str | None = None
    stockanalysis_url: str | None = None
    request_timeout: float = 15.0

    policy: ReconciliationPolicy = field(default_factory=ReconciliationPolicy)
