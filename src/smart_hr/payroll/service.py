from __future__ import annotations

from typing import List, Optional

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import DateLike, range_end_exclusive, range_start
from ..core.enums import Role
from ..core.outcome import Failure, Outcome
from ..users.model import Identity
from ..users.repository import IdentityRepository
from ..users.session import SessionContext
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import PayrollLine


class PayrollService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        identities: IdentityRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._attendance = attendance
        self._identities = identities
        self._calculator = calculator or StandardPayrollCalculator()

    def _line_for(self, identity: Identity, start: Optional[DateLike], end: Optional[DateLike]) -> PayrollLine:
        records = self._attendance.list_closed_for_employee(
            employee_id=identity.id,
            start=range_start(start),
            end_exclusive=range_end_exclusive(end),
        )
        hours = self._calculator.total_hours(records)
        gross, tax, net = self._calculator.pay(identity.hourly_rate, hours)
        return PayrollLine(
            employee_id=identity.id,
            name=identity.name,
            hourly_rate=identity.hourly_rate,
            total_hours=hours,
            gross_pay=gross,
            tax=tax,
            net_pay=net,
        )

    def compute_for_employee(
        self,
        employee_id: int,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
    ) -> Outcome[PayrollLine]:
        """Pay for one identity; ``None`` bounds leave that side of the range open."""
        identity = self._identities.get_by_id(employee_id)
        if not identity:
            return Outcome.fail(Failure.NOT_FOUND)
        return Outcome.success(self._line_for(identity, start, end))

    def compute_for_all_employees(
        self,
        session: SessionContext,
        start: Optional[DateLike],
        end: Optional[DateLike],
    ) -> Outcome[List[PayrollLine]]:
        if not session.is_admin():
            return Outcome.fail(Failure.FORBIDDEN)

        return Outcome.success(
            [self._line_for(identity, start, end) for identity in self._identities.list_by_role(Role.EMPLOYEE)]
        )
