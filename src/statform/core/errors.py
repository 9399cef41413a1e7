"""Error types raised by the store, the validator and the submission flow."""

from __future__ import annotations


class StatformError(RuntimeError):
    """Base exception for Statform failures."""


class StoreConnectionError(StatformError):
    """Raised when the backing database cannot be reached.

    This is fatal for the request: the top-level handler answers with a terse
    plain-text message instead of the page.
    """


class ValidationError(StatformError):
    """Raised when a submitted batch contains an empty, non-numeric or out-of-range value.

    Nothing from the batch is persisted. ``positions`` lists the zero-based
    indexes of the rejected fields for logging; the user only sees one message.
    """

    def __init__(self, message: str, positions: list[int] | None = None) -> None:
        super().__init__(message)
        self.positions = positions or []


class StoreQueryError(StatformError):
    """Raised when an aggregate read against the readings table fails."""


class StoreWriteError(StatformError):
    """Raised when appending a reading fails.

    The batch insert is not wrapped in a transaction, so rows appended before
    the failure stay stored. ``written`` reports how many made it.
    """

    def __init__(self, message: str, written: int = 0) -> None:
        super().__init__(message)
        self.written = written

    @property
    def partial(self) -> bool:
        """True when some rows of the failed batch were already committed."""
        return self.written > 0
