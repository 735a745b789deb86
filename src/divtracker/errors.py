"""Dividend tracker error types."""

from __future__ import annotations

from enum import Enum


class DividendErrorCode(Enum):
    """Error classification codes."""

    INVALID_PRICE = "invalid_price"
    EMPTY_HISTORY = "empty_history"
    DUPLICATE_PERIOD = "duplicate_period"
    RATE_LIMITED = "rate_limited"
    AUTH_FAILED = "auth_failed"
    NOT_FOUND = "not_found"
    TIMEOUT = "timeout"
    PROVIDER_ERROR = "provider_error"
    PARSE_FAILED = "parse_failed"
    VALIDATION_FAILED = "validation_failed"
    NO_DATA = "no_data"


class DividendError(Exception):
    """Dividend tracker exception with error code and retryable flag.

    Attributes:
        message: Human-readable error description.
        code: Structured error code for programmatic handling.
        retryable: Whether the caller should retry with another provider.
    """

    def __init__(
        self,
        message: str,
        code: DividendErrorCode = DividendErrorCode.PROVIDER_ERROR,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.retryable = retryable


class InvalidPriceError(DividendError):
    """Reference price is zero, negative, or missing."""

    def __init__(self, price: float | None) -> None:
        super().__init__(
            f"Invalid reference price: {price!r} (must be > 0)",
            code=DividendErrorCode.INVALID_PRICE,
        )
        self.price = price


class EmptyHistoryError(DividendError):
    """An operation needing at least one dividend was given none."""

    def __init__(self, operation: str) -> None:
        super().__init__(
            f"{operation} requires a non-empty dividend history",
            code=DividendErrorCode.EMPTY_HISTORY,
        )
        self.operation = operation


class DuplicatePeriodError(DividendError):
    """A period already present in a history was about to be inserted again."""

    def __init__(self, label: str) -> None:
        super().__init__(
            f"Dividend for {label} is already present",
            code=DividendErrorCode.DUPLICATE_PERIOD,
        )
        self.label = label
