"""History stores: where reconciled dividend histories are kept.

Parquet (disk) and Memory backends, plus a no-op store.
"""

from __future__ import annotations

import shutil
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path

import pandas as pd

from divtracker.models.dividend import DividendEvent, Provenance
from divtracker.models.history import DividendHistory
from divtracker.models.period import Period

COLUMNS = [
    "year", "month", "amount", "yield_percent", "ex_date", "pay_date",
    "provenance", "symbol", "source",
]


class HistoryStore(ABC):
    """Abstract history store interface."""

    @abstractmethod
    def load(self, symbol: str) -> DividendHistory | None:
        """Return the stored history, or None when nothing is stored."""
        ...

    @abstractmethod
    def save(self, symbol: str, history: DividendHistory) -> None:
        """Replace the stored history for ``symbol``."""
        ...

    @abstractmethod
    def clear(self, symbol: str) -> None:
        ...

    @abstractmethod
    def clear_all(self) -> None:
        ...


class NoStore(HistoryStore):
    """No-op store: nothing survives a refresh."""

    def load(self, symbol):  # type: ignore[override]
        return None

    def save(self, symbol, history):  # type: ignore[override]
        pass

    def clear(self, symbol):  # type: ignore[override]
        pass

    def clear_all(self):
        pass


class MemoryHistoryStore(HistoryStore):
    """In-process store keyed by symbol."""

    def __init__(self) -> None:
        self._store: dict[str, DividendHistory] = {}

    def load(self, symbol: str) -> DividendHistory | None:
        return self._store.get(symbol.upper())

    def save(self, symbol: str, history: DividendHistory) -> None:
        self._store[symbol.upper()] = history

    def clear(self, symbol: str) -> None:
        self._store.pop(symbol.upper(), None)

    def clear_all(self) -> None:
        self._store.clear()


class ParquetHistoryStore(HistoryStore):
    """Disk store using one Parquet file per symbol.

    Storage layout: ``{base_path}/{SYMBOL}.parquet``
    """

    def __init__(self, base_path: Path | str) -> None:
        self.base_path = Path(base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _file_path(self, symbol: str) -> Path:
        return self.base_path / f"{symbol.upper()}.parquet"

    def load(self, symbol: str) -> DividendHistory | None:
        fp = self._file_path(symbol)
        if not fp.exists():
            return None
        return self._df_to_history(pd.read_parquet(fp))

    def save(self, symbol: str, history: DividendHistory) -> None:
        self._history_to_df(history).to_parquet(
            self._file_path(symbol), compression="snappy", index=False,
        )

    def clear(self, symbol: str) -> None:
        self._file_path(symbol).unlink(missing_ok=True)

    def clear_all(self) -> None:
        shutil.rmtree(self.base_path)
        self.base_path.mkdir(parents=True, exist_ok=True)

    # ---- helpers ----

    @staticmethod
    def _history_to_df(history: DividendHistory) -> pd.DataFrame:
        records = [
            {
                "year": e.period.year,
                "month": e.period.month,
                "amount": e.amount,
                "yield_percent": e.yield_percent,
                "ex_date": e.ex_date.isoformat() if e.ex_date else None,
                "pay_date": e.pay_date.isoformat() if e.pay_date else None,
                "provenance": e.provenance.value,
                "symbol": e.symbol,
                "source": e.source,
            }
            for e in history
        ]
        return pd.DataFrame(records, columns=COLUMNS)

    @staticmethod
    def _df_to_history(df: pd.DataFrame) -> DividendHistory:
        def _opt(value):
            return value if pd.notna(value) else None

        events: list[DividendEvent] = []
        for _, row in df.iterrows():
            ex_date = _opt(row.get("ex_date"))
            pay_date = _opt(row.get("pay_date"))
            yield_percent = _opt(row.get("yield_percent"))
            events.append(DividendEvent(
                period=Period(year=int(row["year"]), month=int(row["month"])),
                amount=float(row["amount"]),
                yield_percent=float(yield_percent) if yield_percent is not None else None,
                ex_date=date.fromisoformat(ex_date) if ex_date else None,
                pay_date=date.fromisoformat(pay_date) if pay_date else None,
                provenance=Provenance(row.get("provenance") or "authoritative"),
                symbol=_opt(row.get("symbol")),
                source=_opt(row.get("source")),
            ))
        return DividendHistory.normalize(events)
