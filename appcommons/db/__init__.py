"""Database access: pool, migrations, row queries and transactions."""

from .connection import DatabaseManager, create_pool
from .migrations import run_migration, migration_database_url
from .rows import query_one, query_many
from .transactions import (
    TransactionOperation,
    rollback,
    run_in_transaction,
    rows_affected,
    execute_query_in_transaction,
    single_write_operation,
    run_single_write,
    run_multiple_writes
)

__all__ = [
    "DatabaseManager",
    "create_pool",
    "run_migration",
    "migration_database_url",
    "query_one",
    "query_many",
    "TransactionOperation",
    "rollback",
    "run_in_transaction",
    "rows_affected",
    "execute_query_in_transaction",
    "single_write_operation",
    "run_single_write",
    "run_multiple_writes"
]
