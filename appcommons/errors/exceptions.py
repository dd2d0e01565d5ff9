"""Exceptions raised by the data-access layer."""

from typing import Optional


class DataAccessError(Exception):
    """Base class for all data-access errors."""


class CursorFormatError(DataAccessError):
    """Raised when a cursor token cannot be decoded into (id, timestamp)."""

    def __init__(self, detail: str, token: Optional[str] = None):
        self.token = token
        super().__init__(detail)


class NoRowsError(DataAccessError):
    """Raised when a single-row query matches no row."""

    def __init__(self, query: Optional[str] = None):
        self.query = query
        super().__init__("no rows in result set")


class NoRowsUpdatedError(DataAccessError):
    """Raised when a write succeeds but affects an unexpected number of rows."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"no rows updated on write query: expected {expected} row(s) affected, got {actual}"
        )


class PoolNeverInitializedError(DataAccessError):
    """Raised when the first pool initialization failed and no pool exists."""

    def __init__(self, detail: str = "database connection never initialized"):
        super().__init__(detail)


class TransactionAbortedError(DataAccessError):
    """Raised when a transaction was rolled back because an operation faulted.

    The original fault is available as ``__cause__``.
    """

    def __init__(self, detail: str = "transaction rolled back after an unexpected fault"):
        super().__init__(detail)


class MigrationError(DataAccessError):
    """Raised when schema migration cannot be configured or fails."""
