from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Optional

from ..common.passwords import PasswordHasher
from ..core.constants import DEFAULT_ADMIN_NAME, DEFAULT_ADMIN_PASSWORD, DEFAULT_ADMIN_USERNAME
from ..core.enums import Role
from ..core.exceptions import StorageError
from ..core.logging import get_logger
from .connection import DatabaseConnection
from .sqlite_base import db_cursor

logger = get_logger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


def apply_schema(conn_factory: DatabaseConnection, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    conn_factory.ensure_directory()
    sql = Path(schema_path).read_text(encoding="utf-8")

    try:
        conn = conn_factory.connect()
    except sqlite3.Error as exc:
        raise StorageError(f"cannot open database: {exc}") from exc
    try:
        conn.executescript(sql)
    except sqlite3.Error as exc:
        raise StorageError(f"cannot apply schema: {exc}") from exc
    finally:
        conn.close()


def ensure_default_admin(
    conn_factory: DatabaseConnection,
    hasher: PasswordHasher,
    *,
    password: str = DEFAULT_ADMIN_PASSWORD,
) -> bool:
    """Insert the default administrator if no ``admin`` username exists.

    Returns True when a row was created.
    """
    with db_cursor(conn_factory, immediate=True) as (_, cur):
        cur.execute("SELECT COUNT(*) FROM employees WHERE username=?", (DEFAULT_ADMIN_USERNAME,))
        if int(cur.fetchone()[0]) > 0:
            return False
        cur.execute(
            """
            INSERT INTO employees(name, username, password_hash, hourly_rate, role)
            VALUES(?,?,?,?,?)
            """,
            (DEFAULT_ADMIN_NAME, DEFAULT_ADMIN_USERNAME, hasher.hash(password), "0", Role.ADMIN.value),
        )
    logger.info("created default administrator %r", DEFAULT_ADMIN_USERNAME)
    return True


def initialize_database(
    conn_factory: DatabaseConnection,
    hasher: PasswordHasher,
    *,
    admin_password: Optional[str] = None,
) -> None:
    """Create the schema and the default administrator. Idempotent."""
    apply_schema(conn_factory)
    ensure_default_admin(conn_factory, hasher, password=admin_password or DEFAULT_ADMIN_PASSWORD)
    logger.info("database ready at %s (tables=%d)", conn_factory.path, len(list_tables(conn_factory)))


def list_tables(conn_factory: DatabaseConnection) -> list[str]:
    with db_cursor(conn_factory) as (_, cur):
        cur.execute("SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%' ORDER BY name")
        return [row[0] for row in cur.fetchall()]
