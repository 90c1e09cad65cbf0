from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from ..core.outcome import Failure


def is_blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def parse_hourly_rate(value: Union[str, int, float, Decimal, None]) -> Optional[Decimal]:
    """Return the rate as a Decimal, or None if it is missing, malformed or negative."""
    if value is None or isinstance(value, bool):
        return None
    try:
        rate = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    if not rate.is_finite() or rate < 0:
        return None
    return rate


def check_identity_fields(*, name: Optional[str], username: Optional[str]) -> Optional[Failure]:
    if is_blank(name) or is_blank(username):
        return Failure.MISSING_FIELDS
    return None
