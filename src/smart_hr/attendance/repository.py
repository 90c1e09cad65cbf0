from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def open_session(self, *, employee_id: int, check_in: datetime) -> Optional[AttendanceRecord]:
        """Atomically insert an open record; None if one is already open."""
        raise NotImplementedError

    def close_session(self, *, employee_id: int, check_out: datetime) -> Optional[AttendanceRecord]:
        """Atomically close the open record; None if there is none.

        A ``check_out`` earlier than the record's ``check_in`` is stored as
        ``check_in``.
        """
        raise NotImplementedError

    def list_closed_for_employee(
        self,
        *,
        employee_id: int,
        start: Optional[datetime] = None,
        end_exclusive: Optional[datetime] = None,
    ) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def list_report_rows(
        self,
        *,
        start: datetime,
        end_exclusive: Optional[datetime],
        employee_id: Optional[int] = None,
    ) -> Sequence[AttendanceReportRow]:
        raise NotImplementedError
