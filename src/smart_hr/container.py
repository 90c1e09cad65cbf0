from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.service import AttendanceService
from .attendance.sqlite_attendance_repository import SQLiteAttendanceRepository
from .common.passwords import PasswordHasher
from .database.connection import DBConfig, DatabaseConnection
from .payroll.service import PayrollService
from .users.service import AuthService, EmployeeService
from .users.sqlite_identity_repository import SQLiteIdentityRepository


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    hasher: PasswordHasher

    identities_repo: SQLiteIdentityRepository
    attendance_repo: SQLiteAttendanceRepository

    auth_service: AuthService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    payroll_service: PayrollService


def build_container(*, db_path: str, hasher: Optional[PasswordHasher] = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig(path=str(db_path)))
    hasher = hasher or PasswordHasher()

    identities_repo = SQLiteIdentityRepository(conn)
    attendance_repo = SQLiteAttendanceRepository(conn)

    return Container(
        conn=conn,
        hasher=hasher,
        identities_repo=identities_repo,
        attendance_repo=attendance_repo,
        auth_service=AuthService(identities_repo, hasher),
        employee_service=EmployeeService(identities_repo, hasher),
        attendance_service=AttendanceService(attendance_repo, identities_repo),
        payroll_service=PayrollService(attendance_repo, identities_repo),
    )
