"""DividendDashboard: feeds -> store -> reconcile -> engine."""

from __future__ import annotations

import logging
import random
from datetime import date, datetime, timezone
from typing import Any

from divtracker import engine
from divtracker.config import DashboardConfig, FeedProviderType
from divtracker.errors import DividendError, DividendErrorCode
from divtracker.models.dividend import DividendEvent
from divtracker.models.history import DividendHistory
from divtracker.models.period import Period
from divtracker.models.quote import PriceQuote
from divtracker.models.scenario import InvestmentScenario
from divtracker.models.snapshot import DashboardSnapshot
from divtracker.providers import create_provider
from divtracker.providers.base import BaseFeedProvider
from divtracker.quality import validate_history, validate_quote
from divtracker.reconcile import reconcile_with_report
from divtracker.store import HistoryStore, MemoryHistoryStore, NoStore, ParquetHistoryStore

logger = logging.getLogger(__name__)

DEFAULT_INVESTMENT = 20000.0


class DividendDashboard:
    """Central orchestrator for one fund.

    Usage::

        from divtracker import create_dashboard_from_env
        dash = create_dashboard_from_env()
        snap = dash.refresh(investment_amount=20000)
        print(snap.annualized_yield, snap.returns.expected_monthly_dividend)
    """

    def __init__(
        self,
        config: DashboardConfig,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config
        self.symbol = config.symbol.upper()
        self.rng = rng or random.Random()

        # Build provider chain
        self.providers: list[BaseFeedProvider] = []
        for pt in config.providers:
            kwargs: dict[str, Any] = {}
            if pt is FeedProviderType.FINNHUB and config.finnhub_api_key:
                kwargs["api_key"] = config.finnhub_api_key
            elif pt is FeedProviderType.POLYGON:
                if config.polygon_api_key:
                    kwargs["api_key"] = config.polygon_api_key
                kwargs["timeout"] = config.request_timeout
            elif pt is FeedProviderType.STOCKANALYSIS:
                kwargs["url"] = config.stockanalysis_url
                kwargs["timeout"] = config.request_timeout
            self.providers.append(create_provider(pt, **kwargs))

        # Build store
        self.store: HistoryStore
        if config.store_backend == "parquet":
            self.store = ParquetHistoryStore(config.store_dir)
        elif config.store_backend == "memory":
            self.store = MemoryHistoryStore()
        else:
            self.store = NoStore()

    # --------------------------------------------------------------- quotes

    def get_quote(self) -> PriceQuote:
        """Quote from the first capable provider that passes validation.

        When every provider fails and a fallback quote is configured, the
        fallback is returned flagged with ``is_fallback``.
        """
        try:
            quote = self._first_capable("quotes", "get_quote", self.symbol)
            if self.config.validate and not validate_quote(quote):
                raise DividendError(
                    f"Quote for {self.symbol} failed validation: {quote.current_price}",
                    code=DividendErrorCode.VALIDATION_FAILED,
                    retryable=True,
                )
            return quote
        except DividendError as e:
            if not e.retryable or self.config.fallback_quote is None:
                raise
            price, prev_close, high, low = self.config.fallback_quote
            logger.warning("Using fallback quote for %s: %s", self.symbol, e)
            return PriceQuote(
                symbol=self.symbol,
                current_price=price,
                previous_close=prev_close,
                high=high,
                low=low,
                timestamp=datetime.now(timezone.utc),
                is_fallback=True,
            )

    # ------------------------------------------------------------ dividends

    def get_history(self, limit: int = 12) -> DividendHistory:
        """Stored history merged with the first capable dividend feed.

        Feed entries supersede stored placeholders for the same period.
        When the feed fails and a history is stored, the stored one wins.
        """
        stored = self.store.load(self.symbol) or DividendHistory()
        try:
            fetched = self._first_capable("dividends", "get_dividends", self.symbol, limit=limit)
        except DividendError as e:
            if not stored or not e.retryable:
                raise
            logger.warning("Dividend feed unavailable, using stored history: %s", e)
            return stored

        history = stored
        for event in DividendHistory.normalize(fetched):
            history = history.supersede(event)
        return history

    def check_for_new_dividend(self, today: date | None = None) -> DividendEvent | None:
        """Look for a dividend the stored history does not have yet.

        Dividend providers are asked in order for their latest event. The
        first one covering a period that is missing, or held only by a
        placeholder, is priced against the current quote, recorded and
        saved. Returns that event, or None when nothing new was found.
        """
        today = today or date.today()
        stored = self.store.load(self.symbol) or DividendHistory()
        logger.info("Checking for new %s dividend (%d stored)", self.symbol, len(stored))

        for provider in self.providers:
            if "dividends" not in provider.capabilities():
                continue
            try:
                latest = provider.get_latest_dividend(self.symbol)
            except DividendError as e:
                if not e.retryable:
                    raise
                logger.warning("%s dividend check failed: %s", provider.name, e)
                continue
            except NotImplementedError:
                continue

            if latest is None or latest.period > Period.from_date(today).next():
                continue
            existing = stored.get(latest.period)
            if existing is not None and not existing.is_placeholder:
                continue

            quote = self.get_quote()
            event = latest.with_yield(quote.current_price)
            self.store.save(self.symbol, stored.supersede(event))
            logger.info(
                "New %s dividend from %s: %s $%.4f",
                self.symbol, provider.name, event.label, event.amount,
            )
            return event

        logger.info("No new %s dividend found", self.symbol)
        return None

    # -------------------------------------------------------------- refresh

    def refresh(
        self,
        today: date | None = None,
        investment_amount: float = DEFAULT_INVESTMENT,
        scenario: InvestmentScenario | None = None,
    ) -> DashboardSnapshot:
        """Fetch both feeds, reconcile, and compute every displayed figure."""
        today = today or date.today()
        scenario = scenario or InvestmentScenario.average()

        quote = self.get_quote()
        history = self.get_history()

        result = reconcile_with_report(
            history, today, quote.current_price, self.config.policy, self.rng,
        )
        history = result.history
        if result.changed:
            self.store.save(self.symbol, history)

        check = validate_history(history, quote.current_price)
        warnings = [f"{c.name}: {c.message}" for c in check.failed_checks]
        if not history:
            return DashboardSnapshot(quote=quote, history=history, history_warnings=warnings)

        return DashboardSnapshot(
            quote=quote,
            history=history,
            placeholders=result.added,
            trailing_average=engine.trailing_average(history),
            annualized_yield=engine.annualized_yield(history, quote.current_price),
            returns=engine.calculate_returns(
                history, quote, investment_amount, scenario, today,
            ),
            history_warnings=warnings,
        )

    # ------------------------------------------------------------ internal

    def _first_capable(self, capability: str, method: str, *args: Any, **kwargs: Any) -> Any:
        """Try providers in order for a given capability."""
        last_error: DividendError | None = None
        for provider in self.providers:
            if capability not in provider.capabilities():
                continue
            try:
                return getattr(provider, method)(*args, **kwargs)
            except DividendError as e:
                if not e.retryable:
                    raise
                logger.info("%s failed for %s, trying next provider: %s", provider.name, capability, e)
                last_error = e
                continue
            except NotImplementedError:
                continue

        raise last_error or DividendError(
            f"No provider supports '{capability}'",
            code=DividendErrorCode.NO_DATA,
            retryable=True,
        )
