"""Exception handlers translating data-access errors into Problem Details."""

import logging
from fastapi import Request
from fastapi.responses import JSONResponse

from .exceptions import (
    DataAccessError,
    CursorFormatError,
    NoRowsError,
    NoRowsUpdatedError,
    PoolNeverInitializedError,
)
from .problem_details import (
    ProblemDetailException,
    BadRequestError,
    NotFoundError,
    ConflictError,
    InternalServerError,
    ServiceUnavailableError,
)

logger = logging.getLogger(__name__)


def to_problem_exception(exc: DataAccessError) -> ProblemDetailException:
    """Map a data-access error onto its HTTP problem."""
    if isinstance(exc, CursorFormatError):
        return BadRequestError(f"Invalid cursor: {exc}")
    if isinstance(exc, NoRowsError):
        return NotFoundError()
    if isinstance(exc, NoRowsUpdatedError):
        return ConflictError(
            "Resource was not updated; it may have been modified or removed concurrently",
            expected_rows=exc.expected,
            affected_rows=exc.actual
        )
    if isinstance(exc, PoolNeverInitializedError):
        return ServiceUnavailableError("Database connection is not available")
    return InternalServerError("A data access error occurred")


async def problem_detail_exception_handler(
    request: Request,
    exc: ProblemDetailException
) -> JSONResponse:
    """Handle ProblemDetailException instances."""
    logger.info(
        f"Problem detail exception: {exc.status} - {exc.title}",
        extra={
            "status_code": exc.status,
            "path": str(request.url.path),
            "method": request.method,
            "detail": exc.detail
        }
    )
    return exc.to_response(request)


async def data_access_exception_handler(
    request: Request,
    exc: DataAccessError
) -> JSONResponse:
    """Handle errors raised by the data-access layer."""
    problem = to_problem_exception(exc)
    if problem.status >= 500:
        logger.error(
            f"Data access error: {type(exc).__name__} - {exc}",
            extra={
                "path": str(request.url.path),
                "method": request.method,
                "exception_type": type(exc).__name__
            },
            exc_info=exc
        )
    else:
        logger.info(
            f"Data access error: {type(exc).__name__} - {exc}",
            extra={
                "status_code": problem.status,
                "path": str(request.url.path),
                "method": request.method
            }
        )
    return problem.to_response(request)


def register_exception_handlers(app):
    """Register the data-access exception handlers with a FastAPI app."""
    app.add_exception_handler(ProblemDetailException, problem_detail_exception_handler)
    app.add_exception_handler(DataAccessError, data_access_exception_handler)
