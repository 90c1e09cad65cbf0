from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Authorization tier stored in ``employees.role``."""

    ADMIN = "Admin"
    EMPLOYEE = "Employee"
