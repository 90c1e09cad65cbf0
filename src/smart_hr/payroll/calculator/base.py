from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Iterable, Tuple

from ...attendance.model import AttendanceRecord


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def total_hours(self, records: Iterable[AttendanceRecord]) -> Decimal:
        raise NotImplementedError

    @abstractmethod
    def pay(self, hourly_rate: Decimal, hours: Decimal) -> Tuple[Decimal, Decimal, Decimal]:
        """Return ``(gross, tax, net)``."""
        raise NotImplementedError
