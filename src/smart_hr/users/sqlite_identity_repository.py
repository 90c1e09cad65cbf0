from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Sequence, Tuple

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall, fetchone
from .model import Identity
from .repository import IdentityRepository

_COLUMNS = "id, name, username, hourly_rate, role"


def _to_identity(row: Dict[str, Any]) -> Identity:
    return Identity(
        id=int(row["id"]),
        name=row["name"],
        username=row["username"],
        hourly_rate=Decimal(str(row["hourly_rate"])),
        role=Role(row["role"]),
    )


class SQLiteIdentityRepository(IdentityRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE id=?", (int(employee_id),))
            row = fetchone(cur)
            return _to_identity(row) if row else None

    def get_credentials(self, username: str) -> Optional[Tuple[Identity, str]]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS}, password_hash FROM employees WHERE username=?", (username,))
            row = fetchone(cur)
            if not row:
                return None
            return _to_identity(row), row["password_hash"]

    def create(
        self,
        *,
        name: str,
        username: str,
        password_hash: str,
        hourly_rate: Decimal,
        role: Role,
    ) -> Optional[int]:
        with db_cursor(self._conn_factory, immediate=True) as (_, cur):
            cur.execute("SELECT 1 FROM employees WHERE username=?", (username,))
            if cur.fetchone():
                return None
            cur.execute(
                """
                INSERT INTO employees(name, username, password_hash, hourly_rate, role)
                VALUES(?,?,?,?,?)
                """,
                (name, username, password_hash, str(hourly_rate), role.value),
            )
            return int(cur.lastrowid)

    def update(
        self,
        *,
        employee_id: int,
        name: str,
        username: str,
        hourly_rate: Decimal,
        password_hash: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory, immediate=True) as (_, cur):
            cur.execute("SELECT 1 FROM employees WHERE username=? AND id<>?", (username, int(employee_id)))
            if cur.fetchone():
                return False

            if password_hash is None:
                cur.execute(
                    "UPDATE employees SET name=?, username=?, hourly_rate=? WHERE id=?",
                    (name, username, str(hourly_rate), int(employee_id)),
                )
            else:
                cur.execute(
                    "UPDATE employees SET name=?, username=?, hourly_rate=?, password_hash=? WHERE id=?",
                    (name, username, str(hourly_rate), password_hash, int(employee_id)),
                )
            return cur.rowcount > 0

    def set_password_hash(self, employee_id: int, password_hash: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE employees SET password_hash=? WHERE id=?", (password_hash, int(employee_id)))
            return cur.rowcount > 0

    def delete_by_id(self, employee_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM employees WHERE id=?", (int(employee_id),))
            return cur.rowcount > 0

    def list_by_role(self, role: Role) -> Sequence[Identity]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE role=? ORDER BY id ASC", (role.value,))
            return [_to_identity(r) for r in fetchall(cur)]
