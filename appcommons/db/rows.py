"""Single-row and multi-row query helpers."""

import logging
from typing import Any, Callable, List, Optional, TypeVar, Union

import asyncpg

from ..errors.exceptions import NoRowsError


logger = logging.getLogger(__name__)

T = TypeVar("T")

RowMapper = Callable[[asyncpg.Record], T]
Executor = Union[asyncpg.Pool, asyncpg.Connection]


async def query_one(
    conn: Executor,
    query: str,
    *args: Any,
    mapper: Optional[RowMapper] = None,
    timeout: Optional[float] = None
) -> Any:
    """Fetch exactly one row.

    Args:
        conn: Pool or connection to query
        query: SQL with ``$n`` placeholders
        *args: Positional query arguments
        mapper: Applied once to the fetched record
        timeout: Optional timeout in seconds

    Returns:
        The mapped row, or the raw record when no mapper is given

    Raises:
        NoRowsError: If the query matched no row
    """
    row = await conn.fetchrow(query, *args, timeout=timeout)
    if row is None:
        raise NoRowsError(query)
    return mapper(row) if mapper is not None else row


async def query_many(
    conn: Executor,
    query: str,
    *args: Any,
    mapper: Optional[RowMapper] = None,
    timeout: Optional[float] = None
) -> List[Any]:
    """Fetch all rows of a query.

    ``mapper`` is applied once per row in result order; the first error it
    raises stops iteration and propagates.

    Args:
        conn: Pool or connection to query
        query: SQL with ``$n`` placeholders
        *args: Positional query arguments
        mapper: Applied to every fetched record
        timeout: Optional timeout in seconds

    Returns:
        Mapped rows, or raw records when no mapper is given
    """
    rows = await conn.fetch(query, *args, timeout=timeout)
    logger.debug(f"Fetched {len(rows)} rows")
    if mapper is None:
        return list(rows)
    return [mapper(row) for row in rows]
