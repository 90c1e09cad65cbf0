from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one check-in/check-out interval."""

    id: int
    employee_id: int
    check_in: datetime
    check_out: Optional[datetime] = None

    @property
    def is_open(self) -> bool:
        return self.check_out is None

    @property
    def duration(self) -> Optional[timedelta]:
        if self.check_out is None:
            return None
        return self.check_out - self.check_in

    @property
    def hours(self) -> Optional[float]:
        d = self.duration
        return d.total_seconds() / 3600 if d is not None else None


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for listings: the record plus the employee's display name.

    ``employee_name`` is None when the employee has since been deleted.
    """

    record: AttendanceRecord
    employee_name: Optional[str]

    @property
    def hours_label(self) -> str:
        hours = self.record.hours
        return f"{hours:.2f}" if hours is not None else "N/A"
