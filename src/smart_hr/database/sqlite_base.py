from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Tuple

from ..core.exceptions import StorageError
from ..core.logging import get_logger
from .connection import DatabaseConnection

logger = get_logger(__name__)


@contextmanager
def db_cursor(
    conn_factory: DatabaseConnection, *, immediate: bool = False
) -> Iterator[Tuple[sqlite3.Connection, sqlite3.Cursor]]:
    """Run one unit of work in a transaction on a fresh connection.

    ``immediate=True`` takes SQLite's write lock up front, so a read followed
    by a write inside the block cannot interleave with another writer.
    Any ``sqlite3.Error`` is rolled back and re-raised as ``StorageError``.
    """
    try:
        conn = conn_factory.connect()
    except sqlite3.Error as exc:
        logger.error("cannot open database %s: %s", conn_factory.path, exc)
        raise StorageError(f"cannot open database: {exc}") from exc

    try:
        cur = conn.cursor()
        try:
            cur.execute("BEGIN IMMEDIATE" if immediate else "BEGIN")
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except sqlite3.Error as exc:
        conn.rollback()
        logger.error("storage error on %s: %s", conn_factory.path, exc)
        raise StorageError(str(exc)) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur: sqlite3.Cursor) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return dict(row) if row else None


def fetchall(cur: sqlite3.Cursor) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return [dict(r) for r in rows or []]
