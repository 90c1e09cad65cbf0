from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..common.datetime_utils import from_db_timestamp, to_db_timestamp
from ..core.logging import get_logger
from ..database.connection import DatabaseConnection
from ..database.sqlite_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

logger = get_logger(__name__)


def _to_record(row: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(row["id"]),
        employee_id=int(row["employee_id"]),
        check_in=from_db_timestamp(row["check_in"]),
        check_out=from_db_timestamp(row.get("check_out")),
    )


class SQLiteAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, employee_id, check_in, check_out
                FROM attendances
                WHERE employee_id=? AND check_out IS NULL
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
            return _to_record(row) if row else None

    def open_session(self, *, employee_id: int, check_in: datetime) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory, immediate=True) as (_, cur):
            cur.execute(
                "SELECT 1 FROM attendances WHERE employee_id=? AND check_out IS NULL",
                (int(employee_id),),
            )
            if cur.fetchone():
                return None
            cur.execute(
                "INSERT INTO attendances(employee_id, check_in, check_out) VALUES(?,?,NULL)",
                (int(employee_id), to_db_timestamp(check_in)),
            )
            return AttendanceRecord(id=int(cur.lastrowid), employee_id=int(employee_id), check_in=check_in)

    def close_session(self, *, employee_id: int, check_out: datetime) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory, immediate=True) as (_, cur):
            cur.execute(
                """
                SELECT id, employee_id, check_in, check_out
                FROM attendances
                WHERE employee_id=? AND check_out IS NULL
                """,
                (int(employee_id),),
            )
            row = fetchone(cur)
            if not row:
                return None

            record = _to_record(row)
            if check_out < record.check_in:
                logger.warning(
                    "check-out %s precedes check-in %s for employee %d; clamping",
                    check_out,
                    record.check_in,
                    record.employee_id,
                )
                check_out = record.check_in

            cur.execute(
                "UPDATE attendances SET check_out=? WHERE id=? AND check_out IS NULL",
                (to_db_timestamp(check_out), record.id),
            )
            if cur.rowcount != 1:
                return None
            return AttendanceRecord(
                id=record.id, employee_id=record.employee_id, check_in=record.check_in, check_out=check_out
            )

    def list_closed_for_employee(
        self,
        *,
        employee_id: int,
        start: Optional[datetime] = None,
        end_exclusive: Optional[datetime] = None,
    ) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, employee_id, check_in, check_out
                FROM attendances
                WHERE employee_id=:employee_id
                  AND check_out IS NOT NULL
                  AND (:start IS NULL OR check_in >= :start)
                  AND (:end IS NULL OR check_in < :end)
                ORDER BY check_in ASC
                """,
                {
                    "employee_id": int(employee_id),
                    "start": to_db_timestamp(start) if start else None,
                    "end": to_db_timestamp(end_exclusive) if end_exclusive else None,
                },
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_report_rows(
        self,
        *,
        start: datetime,
        end_exclusive: Optional[datetime],
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT a.id, a.employee_id, a.check_in, a.check_out, e.name AS employee_name
                FROM attendances a
                LEFT JOIN employees e ON e.id = a.employee_id
                WHERE a.check_in >= :start
                  AND (:end IS NULL OR a.check_in < :end)
                  AND (:employee_id IS NULL OR a.employee_id = :employee_id)
                ORDER BY a.check_in DESC, a.id DESC
                """,
                {
                    "start": to_db_timestamp(start),
                    "end": to_db_timestamp(end_exclusive) if end_exclusive else None,
                    "employee_id": int(employee_id) if employee_id is not None else None,
                },
            )
            return [AttendanceReportRow(record=_to_record(r), employee_name=r.get("employee_name")) for r in fetchall(cur)]
