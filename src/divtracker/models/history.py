"""Ordered, period-unique dividend history."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from divtracker.errors import DuplicatePeriodError
from divtracker.models.dividend import DividendEvent
from divtracker.models.period import Period

logger = logging.getLogger(__name__)


class DividendHistory:
    """Immutable sequence of dividend events, newest period first.

    Invariants: periods are unique and events are sorted descending by
    ``(year, month)``. Every operation that changes the contents returns a
    new history.
    """

    __slots__ = ("_events",)

    def __init__(self, events: Iterable[DividendEvent] = ()) -> None:
        ordered = tuple(events)
        for newer, older in zip(ordered, ordered[1:]):
            if newer.period == older.period:
                raise DuplicatePeriodError(newer.label)
            if newer.period < older.period:
                raise ValueError(
                    f"History out of order: {newer.label} before {older.label}; "
                    "use DividendHistory.normalize for unordered feeds"
                )
        self._events = ordered

    @classmethod
    def normalize(cls, records: Iterable[DividendEvent]) -> DividendHistory:
        """Build a history from an unordered feed.

        Duplicate periods collapse to one entry: an authoritative entry
        beats a placeholder, otherwise the first one seen is kept.
        """
        by_period: dict[Period, DividendEvent] = {}
        for event in records:
            existing = by_period.get(event.period)
            if existing is None:
                by_period[event.period] = event
            elif existing.is_placeholder and not event.is_placeholder:
                by_period[event.period] = event
            elif existing.is_placeholder == event.is_placeholder:
                logger.warning(
                    "Duplicate dividend for %s in feed (%s vs %s); keeping the first",
                    event.label, existing.amount, event.amount,
                )
        return cls(sorted(by_period.values(), key=lambda e: e.period, reverse=True))

    # --- Sequence protocol ---

    def __len__(self) -> int:
        return len(self._events)

    def __iter__(self) -> Iterator[DividendEvent]:
        return iter(self._events)

    def __getitem__(self, index: int) -> DividendEvent:
        return self._events[index]

    def __bool__(self) -> bool:
        return bool(self._events)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DividendHistory):
            return NotImplemented
        return self._events == other._events

    def __hash__(self) -> int:
        return hash(self._events)

    def __repr__(self) -> str:
        labels = ", ".join(f"{e.label}={e.amount}" for e in self._events)
        return f"DividendHistory([{labels}])"

    # --- Queries ---

    @property
    def events(self) -> tuple[DividendEvent, ...]:
        return self._events

    @property
    def latest(self) -> DividendEvent | None:
        return self._events[0] if self._events else None

    @property
    def amounts(self) -> list[float]:
        return [e.amount for e in self._events]

    @property
    def periods(self) -> list[Period]:
        return [e.period for e in self._events]

    @property
    def placeholders(self) -> list[DividendEvent]:
        return [e for e in self._events if e.is_placeholder]

    def contains(self, period: Period) -> bool:
        return any(e.period == period for e in self._events)

    def get(self, period: Period) -> DividendEvent | None:
        for event in self._events:
            if event.period == period:
                return event
        return None

    def window(self, n: int) -> list[DividendEvent]:
        """The ``n`` newest entries (fewer when the history is shorter)."""
        return list(self._events[:n])

    # --- Updates ---

    def insert(self, event: DividendEvent) -> DividendHistory:
        """Add an event for a period not yet present, keeping the sort."""
        if self.contains(event.period):
            raise DuplicatePeriodError(event.label)
        events = list(self._events)
        index = next(
            (i for i, e in enumerate(events) if e.period < event.period),
            len(events),
        )
        events.insert(index, event)
        return DividendHistory(events)

    def supersede(self, event: DividendEvent) -> DividendHistory:
        """Record an authoritative event, replacing a placeholder if present.

        An authoritative entry already held for the period is left alone,
        and a placeholder never replaces anything.
        """
        existing = self.get(event.period)
        if existing is None:
            return self.insert(event)
        if not existing.is_placeholder or event.is_placeholder:
            return self
        return DividendHistory(
            event if e.period == event.period else e for e in self._events
        )

    def with_yields(self, price: float | None) -> DividendHistory:
        """Recompute every entry's yield against ``price``."""
        return DividendHistory(e.with_yield(price) for e in self._events)
