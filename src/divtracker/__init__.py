"""divtracker: dividend yield and projection SDK for a monthly-paying ETF.

Price and dividend feeds with automatic fallback, placeholder
reconciliation for due periods, yield/scenario projections, and a
persistent history store.

Quick start::

    from divtracker import create_dashboard_from_env
    dash = create_dashboard_from_env()
    snap = dash.refresh(investment_amount=20000)
"""

from __future__ import annotations

import os

from divtracker.config import DashboardConfig, FeedProviderType, ReconciliationPolicy
from divtracker.engine import (
    annualized_yield,
    apply_preset,
    bearish,
    bullish,
    calculate_returns,
    minimum,
    peak,
    project_returns,
    reset,
    shares_for,
    trailing_average,
    yield_of,
)
from divtracker.errors import (
    DividendError,
    DividendErrorCode,
    DuplicatePeriodError,
    EmptyHistoryError,
    InvalidPriceError,
)
from divtracker.manager import DividendDashboard
from divtracker.models import (
    DashboardSnapshot,
    DividendEvent,
    DividendHistory,
    InvestmentScenario,
    Period,
    PriceQuote,
    ProjectedReturn,
    Provenance,
    ReturnsSummary,
    ScenarioMode,
)
from divtracker.reconcile import (
    ReconciliationResult,
    in_announcement_window,
    is_due,
    is_period_present,
    reconcile,
    reconcile_with_report,
    synthesize,
)

__version__ = "0.1.0"

__all__ = [
    # Manager
    "DividendDashboard",
    "create_dashboard_from_env",
    # Config
    "DashboardConfig",
    "FeedProviderType",
    "ReconciliationPolicy",
    # Errors
    "DividendError",
    "DividendErrorCode",
    "InvalidPriceError",
    "EmptyHistoryError",
    "DuplicatePeriodError",
    # Models
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
    # Engine
    "yield_of",
    "shares_for",
    "trailing_average",
    "annualized_yield",
    "project_returns",
    "calculate_returns",
    "bullish",
    "bearish",
    "peak",
    "minimum",
    "reset",
    "apply_preset",
    # Reconciliation
    "ReconciliationResult",
    "is_period_present",
    "is_due",
    "in_announcement_window",
    "synthesize",
    "reconcile",
    "reconcile_with_report",
]


def create_dashboard_from_env() -> DividendDashboard:
    """Zero-config factory. Reads provider list and API keys from env vars.

    Environment variables:
        DIVTRACKER_SYMBOL: Fund ticker (default: "WNTR").
        DIVTRACKER_PROVIDERS: Comma-separated provider list
            (default: "finnhub,polygon").
        DIVTRACKER_STORE: History store: "parquet", "memory", "none"
            (default: "parquet").
        DIVTRACKER_STORE_DIR: Store directory (default: "data/dividends").
        DIVTRACKER_DETERMINISTIC: "1" to always synthesize announced
            placeholders inside the announcement window.
        FINNHUB_API_KEY: Finnhub API key.
        POLYGON_API_KEY: Polygon.io API key.
    """
    provider_str = os.getenv("DIVTRACKER_PROVIDERS", "finnhub,polygon")
    provider_types = [
        FeedProviderType(name.strip().lower())
        for name in provider_str.split(",")
        if name.strip()
    ]

    deterministic = os.getenv("DIVTRACKER_DETERMINISTIC", "").strip().lower() in {"1", "true", "yes"}

    config = DashboardConfig(
        symbol=os.getenv("DIVTRACKER_SYMBOL", "WNTR"),
        providers=provider_types,
        store_backend=os.getenv("DIVTRACKER_STORE", "parquet"),
        store_dir=os.getenv("DIVTRACKER_STORE_DIR", "data/dividends"),
        finnhub_api_key=os.getenv("FINNHUB_API_KEY"),
        polygon_api_key=os.getenv("POLYGON_API_KEY"),
        policy=ReconciliationPolicy(deterministic=deterministic),
    )

    return DividendDashboard(config)
