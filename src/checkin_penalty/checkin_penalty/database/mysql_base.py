from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import TransientStoreError
from .connection import DatabaseConnection

logger = logging.getLogger(__name__)

# Errors where rolling back and re-running the whole transaction is safe.
RETRYABLE_ERRNOS = frozenset(
    {
        errorcode.ER_LOCK_DEADLOCK,
        errorcode.ER_LOCK_WAIT_TIMEOUT,
        errorcode.CR_SERVER_GONE_ERROR,
        errorcode.CR_SERVER_LOST,
    }
)


def is_retryable(exc: mysql.connector.Error) -> bool:
    return exc.errno in RETRYABLE_ERRNOS or isinstance(exc, mysql.connector.OperationalError)


def translate_error(exc: mysql.connector.Error) -> Exception:
    if is_retryable(exc):
        return TransientStoreError(f"MySQL transient error {exc.errno}: {exc.msg}")
    return exc


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    """Single statement scope: commit on success, rollback on any error."""
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise translate_error(exc) from exc
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _safe_rollback(conn)
        raise translate_error(exc) from exc
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


@contextmanager
def db_transaction(conn_factory: DatabaseConnection, *, dictionary: bool = True) -> Iterator[Any]:
    """Explicit ``START TRANSACTION`` scope for read-modify-write work.

    Locking reads (``SELECT ... FOR UPDATE``) issued on the yielded cursor hold
    their row locks until this block commits or rolls back.
    """
    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        raise translate_error(exc) from exc
    try:
        conn.start_transaction()
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.Error as exc:
        _safe_rollback(conn)
        raise translate_error(exc) from exc
    except Exception:
        _safe_rollback(conn)
        raise
    finally:
        conn.close()


def _safe_rollback(conn) -> None:
    # A dropped connection cannot roll back; the server discards the transaction.
    try:
        conn.rollback()
    except mysql.connector.Error:
        logger.warning("db.rollback_failed", exc_info=True)


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None

