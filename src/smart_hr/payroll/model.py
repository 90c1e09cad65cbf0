from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class PayrollLine:
    """Computed pay for one employee over a date range."""

    employee_id: int
    name: str
    hourly_rate: Decimal
    total_hours: Decimal
    gross_pay: Decimal
    tax: Decimal
    net_pay: Decimal
