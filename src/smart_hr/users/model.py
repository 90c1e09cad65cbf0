from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.enums import Role


@dataclass(frozen=True)
class Identity:
    """Domain entity: an employee or administrator.

    Note: the stored password hash is never part of this value.
    """

    id: int
    name: str
    username: str
    hourly_rate: Decimal
    role: Role = Role.EMPLOYEE

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
