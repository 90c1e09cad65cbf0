from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from ..common.datetime_utils import DateLike, now_local, range_end_exclusive, range_start
from ..core.logging import get_logger
from ..core.outcome import Failure, Outcome
from ..users.repository import IdentityRepository
from .model import AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

logger = get_logger(__name__)


class AttendanceService:
    """Check-in/check-out ledger with at most one open session per employee."""

    def __init__(self, attendance: AttendanceRepository, identities: IdentityRepository):
        self._attendance = attendance
        self._identities = identities

    def check_in(self, employee_id: int, *, now: Optional[datetime] = None) -> Outcome[AttendanceRecord]:
        now = now or now_local()

        if not self._identities.get_by_id(employee_id):
            return Outcome.fail(Failure.NOT_FOUND)

        record = self._attendance.open_session(employee_id=int(employee_id), check_in=now)
        if record is None:
            return Outcome.fail(Failure.ALREADY_OPEN)

        logger.info("employee %d checked in at %s", record.employee_id, record.check_in)
        return Outcome.success(record)

    def check_out(self, employee_id: int, *, now: Optional[datetime] = None) -> Outcome[AttendanceRecord]:
        now = now or now_local()

        record = self._attendance.close_session(employee_id=int(employee_id), check_out=now)
        if record is None:
            return Outcome.fail(Failure.NO_OPEN_SESSION)

        logger.info("employee %d checked out, worked %.2f h", record.employee_id, record.hours)
        return Outcome.success(record)

    def is_open(self, employee_id: int) -> bool:
        return self._attendance.get_open_for_employee(int(employee_id)) is not None

    def get_status(self, employee_id: int) -> Optional[AttendanceRecord]:
        """The open record, or None when the employee is checked out."""
        return self._attendance.get_open_for_employee(int(employee_id))

    def list_by_range(
        self,
        start: DateLike,
        end: DateLike,
        *,
        employee_id: Optional[int] = None,
    ) -> List[AttendanceReportRow]:
        """Records with ``check_in`` from ``start`` through the end of ``end``'s day, newest first."""
        rows = self._attendance.list_report_rows(
            start=range_start(start),
            end_exclusive=range_end_exclusive(end),
            employee_id=employee_id,
        )
        return list(rows)
