"""Transactional write helpers.

``run_in_transaction`` is the high level wrapper: begin, run the operation,
commit on success and roll back otherwise. Data, driver and transport errors
raised by an operation are re-raised unchanged after the rollback. Any other exception is treated as
a fault: it is logged, the transaction is rolled back and a
``TransactionAbortedError`` is raised in its place.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import asyncpg
from asyncpg.transaction import Transaction

from ..errors.exceptions import DataAccessError, NoRowsUpdatedError, TransactionAbortedError


logger = logging.getLogger(__name__)

TransactionOperation = Callable[[asyncpg.Connection], Awaitable[None]]

# Passed through unchanged; anything else raised by an operation is a fault
DATA_ERRORS = (
    DataAccessError,
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    asyncio.TimeoutError,
    OSError
)


async def rollback(transaction: Transaction) -> None:
    """Roll back a transaction, logging instead of raising on failure."""
    try:
        await transaction.rollback()
    except Exception as e:
        logger.error(f"Transaction rollback error: {type(e).__name__} - {e}", exc_info=True)


async def run_in_transaction(
    pool: asyncpg.Pool,
    operation: TransactionOperation,
    *,
    timeout: Optional[float] = None
) -> None:
    """Run an operation inside a single transaction.

    Args:
        pool: Pool to acquire the connection from
        operation: Coroutine function receiving the connection
        timeout: Optional timeout in seconds for acquiring the connection

    Raises:
        DataAccessError, asyncpg.PostgresError, asyncio.TimeoutError, OSError:
            Re-raised from the operation after rollback
        TransactionAbortedError: If the operation raised any other exception
    """
    async with pool.acquire(timeout=timeout) as conn:
        transaction = conn.transaction()
        await transaction.start()

        try:
            await operation(conn)
        except DATA_ERRORS:
            await rollback(transaction)
            raise
        except Exception as e:
            logger.error(f"Recovered from in-transaction fault: {type(e).__name__} - {e}", exc_info=True)
            await rollback(transaction)
            raise TransactionAbortedError() from e
        except BaseException:
            await rollback(transaction)
            raise

        try:
            await transaction.commit()
        except DATA_ERRORS as e:
            logger.error(f"Transaction commit error: {e}")
            raise


def rows_affected(status: str) -> int:
    """Parse the affected row count out of an asyncpg command status.

    ``"UPDATE 3"`` gives 3, ``"INSERT 0 1"`` gives 1, ``"CREATE TABLE"`` gives 0.
    """
    parts = (status or "").split()
    if parts and parts[-1].isdigit():
        return int(parts[-1])
    return 0


async def execute_query_in_transaction(
    conn: asyncpg.Connection,
    query: str,
    *args: Any,
    pre_query: Optional[Callable[[], Any]] = None,
    expected_rows: int = 0,
    timeout: Optional[float] = None
) -> int:
    """Execute a write statement on a connection already inside a transaction.

    Args:
        conn: Connection holding the transaction
        query: Write statement with ``$n`` placeholders
        *args: Positional query arguments
        pre_query: Called right before the statement executes
        expected_rows: Required affected row count; 0 disables the check
        timeout: Optional timeout in seconds

    Returns:
        Number of affected rows

    Raises:
        NoRowsUpdatedError: If ``expected_rows`` is set and not matched
    """
    if pre_query is not None:
        pre_query()
    status = await conn.execute(query, *args, timeout=timeout)
    affected = rows_affected(status)
    if expected_rows > 0 and affected != expected_rows:
        raise NoRowsUpdatedError(expected_rows, affected)
    return affected


def single_write_operation(
    query: str,
    *args: Any,
    pre_query: Optional[Callable[[], Any]] = None,
    timeout: Optional[float] = None
) -> TransactionOperation:
    """Wrap a write that must affect exactly one row for later execution."""
    async def operation(conn: asyncpg.Connection) -> None:
        await execute_query_in_transaction(
            conn, query, *args, pre_query=pre_query, expected_rows=1, timeout=timeout
        )
    return operation


async def run_multiple_writes(
    pool: asyncpg.Pool,
    *operations: Optional[TransactionOperation],
    timeout: Optional[float] = None
) -> None:
    """Run several operations in one transaction.

    ``None`` entries are skipped. The first failing operation stops the rest
    and the whole transaction is rolled back.
    """
    async def run_all(conn: asyncpg.Connection) -> None:
        for index, operation in enumerate(operations):
            if operation is None:
                logger.warning(f"Transaction operation {index} is None, ignoring it")
                continue
            await operation(conn)

    await run_in_transaction(pool, run_all, timeout=timeout)


async def run_single_write(
    pool: asyncpg.Pool,
    query: str,
    *args: Any,
    pre_query: Optional[Callable[[], Any]] = None,
    timeout: Optional[float] = None
) -> None:
    """Execute one write that must affect exactly one row in its own transaction."""
    await run_multiple_writes(
        pool,
        single_write_operation(query, *args, pre_query=pre_query, timeout=timeout),
        timeout=timeout
    )
