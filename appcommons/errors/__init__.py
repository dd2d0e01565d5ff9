"""Error types and HTTP error mapping."""

from .exceptions import (
    DataAccessError,
    CursorFormatError,
    NoRowsError,
    NoRowsUpdatedError,
    PoolNeverInitializedError,
    TransactionAbortedError,
    MigrationError
)
from .problem_details import (
    ProblemDetail,
    ProblemDetailException,
    BadRequestError,
    NotFoundError,
    ConflictError,
    InternalServerError,
    ServiceUnavailableError,
    create_problem_response
)
from .handlers import register_exception_handlers, to_problem_exception

__all__ = [
    "DataAccessError",
    "CursorFormatError",
    "NoRowsError",
    "NoRowsUpdatedError",
    "PoolNeverInitializedError",
    "TransactionAbortedError",
    "MigrationError",
    "ProblemDetail",
    "ProblemDetailException",
    "BadRequestError",
    "NotFoundError",
    "ConflictError",
    "InternalServerError",
    "ServiceUnavailableError",
    "create_problem_response",
    "register_exception_handlers",
    "to_problem_exception"
]
