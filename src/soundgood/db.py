"""
Database connection and transaction utilities.

Every unit of work runs inside ``transaction()``, which hands out an explicit
``Transaction`` handle bound to one psycopg connection with autocommit off.
The handle is committed when the block exits normally and rolled back on
any exception, after which the connection is closed.

For testing, use set_connection_override() to inject a connection that will
be used instead of creating new ones. The override connection is committed
and rolled back like any other, but it is never closed.
"""

import logging
from contextlib import contextmanager
from functools import wraps
from typing import Any

import psycopg
from psycopg.rows import dict_row

from soundgood.config import config
from soundgood.errors import StoreFailure

logger = logging.getLogger(__name__)

# =============================================================================
# Connection Override (for testing)
# =============================================================================

_connection_override: psycopg.Connection | None = None


def set_connection_override(conn: psycopg.Connection) -> None:
    """
    Set a connection to use instead of creating new ones.

    Args:
        conn: The connection to use for all subsequent transactions
    """
    global _connection_override
    _connection_override = conn


def clear_connection_override() -> None:
    """Clear the connection override, restoring normal behavior."""
    global _connection_override
    _connection_override = None


# =============================================================================
# Connection Management
# =============================================================================


@contextmanager
def get_connection():
    """
    Context manager for a raw database connection.

    Opens a new connection with autocommit disabled and closes it when done.
    Committing is left to the caller; see transaction().

    With override set (testing) the override connection is returned and
    left open.
    """
    if _connection_override is not None:
        yield _connection_override
        return

    try:
        conn = psycopg.connect(config.database_url, autocommit=False)
    except psycopg.Error as exc:
        raise StoreFailure("Could not connect to datasource.") from exc
    try:
        yield conn
    finally:
        conn.close()


class Transaction:
    """
    Handle for a single unit of work on one connection.

    Repositories receive this handle instead of opening connections
    themselves, so every read, lock and write of an operation shares the
    same transaction.
    """

    def __init__(self, conn: psycopg.Connection):
        self.conn = conn

    def execute(self, query: str, params: tuple = None) -> int:
        """
        Execute a query without returning results.

        Returns:
            Number of rows affected
        """
        with self.conn.cursor() as cur:
            cur.execute(query, params)
            return cur.rowcount

    def fetch_one(self, query: str, params: tuple = None) -> dict[str, Any] | None:
        """
        Execute a query and return a single row as dict.

        Returns:
            Dict of column names to values, or None if no row found
        """
        with self.conn.cursor(row_factory=dict_row) as cur:
            cur.execute(query, params)
            return cur.fetchone()

    def fetch_all(self, query: str, params: tuple = None) -> list[dict[str, Any]]:
        """
        Execute a query and return all rows as list of dicts.

        Returns:
            List of dicts, empty list if no rows found
        """
        with self.conn.cursor(row_factory=dict_row) as cur:
            cur.execute(query, params)
            return cur.fetchall()

    def commit(self) -> None:
        self.conn.commit()
        logger.debug("Transaction committed")

    def rollback(self) -> None:
        self.conn.rollback()
        logger.debug("Transaction rolled back")


def _rollback_quietly(tx: Transaction) -> Exception | None:
    """Roll back and return the rollback error instead of raising it."""
    try:
        tx.rollback()
    except Exception as rollback_exc:
        logger.error("Rollback failed: %s", rollback_exc)
        return rollback_exc
    return None


@contextmanager
def transaction():
    """
    Context manager for a unit of work.

    - Commits on successful exit
    - Rolls back on any exception, including business rejections, so that
      row locks are released before the error reaches the caller
    - Raw psycopg errors are reported as StoreFailure
    - If the rollback itself fails, both failures are combined into one
      StoreFailure

    Usage:
        with transaction() as tx:
            tx.fetch_one("SELECT ...", (value,))
    """
    with get_connection() as conn:
        tx = Transaction(conn)
        try:
            yield tx
        except Exception as exc:
            rollback_error = _rollback_quietly(tx)
            if isinstance(exc, StoreFailure):
                if rollback_error is None:
                    raise
                raise StoreFailure(exc.message, rollback_error) from exc.__cause__
            if isinstance(exc, psycopg.Error):
                raise StoreFailure("Database operation failed.", rollback_error) from exc
            if rollback_error is not None:
                raise StoreFailure(str(exc), rollback_error) from exc
            raise

        try:
            tx.commit()
        except psycopg.Error as commit_exc:
            rollback_error = _rollback_quietly(tx)
            raise StoreFailure("Failed to commit.", rollback_error) from commit_exc


def store_operation(failure_msg: str):
    """
    Decorator for repository methods: report psycopg errors as StoreFailure
    carrying ``failure_msg``, with the driver error as the cause.
    """

    def decorator(func):
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except psycopg.Error as exc:
                logger.error("%s %s", failure_msg, exc)
                raise StoreFailure(failure_msg) from exc

        return wrapper

    return decorator
