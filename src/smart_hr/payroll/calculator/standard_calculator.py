from __future__ import annotations

from datetime import timedelta
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable, Tuple

from ...attendance.model import AttendanceRecord
from ...core.constants import MONEY_QUANTUM, TAX_RATE
from .base import PayrollCalculator

_MICROSECONDS_PER_HOUR = Decimal(3600 * 1_000_000)


def round_money(value: Decimal) -> Decimal:
    """Two decimal places, half away from zero."""
    return value.quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: closed intervals only, flat tax on gross.

    Hours are summed as exact ``timedelta`` values and only the money figures
    are rounded.
    """

    def __init__(self, tax_rate: Decimal = TAX_RATE):
        self._tax_rate = Decimal(tax_rate)

    def total_hours(self, records: Iterable[AttendanceRecord]) -> Decimal:
        worked = timedelta(0)
        for r in records:
            # Open sessions are not paid until checked out.
            if r.duration is None:
                continue
            worked += max(r.duration, timedelta(0))
        return Decimal(worked // timedelta(microseconds=1)) / _MICROSECONDS_PER_HOUR

    def pay(self, hourly_rate: Decimal, hours: Decimal) -> Tuple[Decimal, Decimal, Decimal]:
        gross = round_money(Decimal(hourly_rate) * hours)
        tax = round_money(gross * self._tax_rate)
        return gross, tax, gross - tax
