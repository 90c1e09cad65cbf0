from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional

import pytest

from smart_hr.attendance.model import AttendanceRecord
from smart_hr.attendance.service import AttendanceService
from smart_hr.common.passwords import PasswordHasher
from smart_hr.core.enums import Role
from smart_hr.core.outcome import Failure
from smart_hr.users.model import Identity
from smart_hr.users.service import AuthService, EmployeeService
from smart_hr.users.session import SessionContext

HASHER = PasswordHasher(method="pbkdf2:sha256:1000")


class InMemoryIdentities:
    def __init__(self):
        self._rows: dict[int, tuple[Identity, str]] = {}
        self._id = 0

    def add(self, *, name, username, password, hourly_rate=Decimal("0"), role=Role.EMPLOYEE, password_hash=None):
        new_id = self.create(
            name=name,
            username=username,
            password_hash=password_hash or HASHER.hash(password),
            hourly_rate=Decimal(hourly_rate),
            role=role,
        )
        return self._rows[new_id][0]

    def stored_hash(self, employee_id: int) -> str:
        return self._rows[employee_id][1]

    def get_by_id(self, employee_id: int) -> Optional[Identity]:
        row = self._rows.get(int(employee_id))
        return row[0] if row else None

    def _by_username(self, username: str) -> Optional[Identity]:
        found = self.get_credentials(username)
        return found[0] if found else None

    def get_credentials(self, username: str):
        for identity, pw_hash in self._rows.values():
            if identity.username == username:
                return identity, pw_hash
        return None

    def create(self, *, name, username, password_hash, hourly_rate, role) -> Optional[int]:
        if self._by_username(username):
            return None
        self._id += 1
        self._rows[self._id] = (
            Identity(id=self._id, name=name, username=username, hourly_rate=hourly_rate, role=role),
            password_hash,
        )
        return self._id

    def update(self, *, employee_id, name, username, hourly_rate, password_hash=None) -> bool:
        other = self._by_username(username)
        if other and other.id != employee_id:
            return False
        identity, old_hash = self._rows[employee_id]
        self._rows[employee_id] = (
            replace(identity, name=name, username=username, hourly_rate=hourly_rate),
            password_hash or old_hash,
        )
        return True

    def set_password_hash(self, employee_id: int, password_hash: str) -> bool:
        identity, _ = self._rows[employee_id]
        self._rows[employee_id] = (identity, password_hash)
        return True

    def delete_by_id(self, employee_id: int) -> bool:
        return self._rows.pop(int(employee_id), None) is not None

    def list_by_role(self, role: Role):
        return [i for i, _ in sorted(self._rows.values(), key=lambda r: r[0].id) if i.role == role]


class InMemoryAttendance:
    def __init__(self):
        self.records: dict[int, AttendanceRecord] = {}
        self._id = 0

    def get_open_for_employee(self, employee_id: int) -> Optional[AttendanceRecord]:
        for r in self.records.values():
            if r.employee_id == employee_id and r.check_out is None:
                return r
        return None

    def open_session(self, *, employee_id: int, check_in: datetime) -> Optional[AttendanceRecord]:
        if self.get_open_for_employee(employee_id):
            return None
        self._id += 1
        rec = AttendanceRecord(id=self._id, employee_id=employee_id, check_in=check_in)
        self.records[rec.id] = rec
        return rec

    def close_session(self, *, employee_id: int, check_out: datetime) -> Optional[AttendanceRecord]:
        rec = self.get_open_for_employee(employee_id)
        if not rec:
            return None
        closed = replace(rec, check_out=max(check_out, rec.check_in))
        self.records[rec.id] = closed
        return closed


@pytest.fixture
def identities():
    repo = InMemoryIdentities()
    repo.add(name="Admin", username="admin", password="admin123", role=Role.ADMIN)
    return repo


@pytest.fixture
def admin(identities):
    return SessionContext(identities.get_credentials("admin")[0])


def test_verify_wrong_password_is_mismatch(identities):
    auth = AuthService(identities, HASHER)

    outcome = auth.verify("admin", "wrong")

    assert not outcome.ok
    assert outcome.failure == Failure.AUTH_MISMATCH
    assert outcome.reason == "Incorrect password"


def test_verify_unknown_username_is_not_found(identities):
    outcome = AuthService(identities, HASHER).verify("ghost", "admin123")
    assert outcome.failure == Failure.AUTH_NOT_FOUND


def test_verify_username_match_is_exact(identities):
    outcome = AuthService(identities, HASHER).verify("Admin", "admin123")
    assert outcome.failure == Failure.AUTH_NOT_FOUND


def test_login_holds_identity_in_session(identities):
    session = SessionContext()

    outcome = AuthService(identities, HASHER).login(session, "admin", "admin123")

    assert outcome.ok
    assert session.current.username == "admin"
    assert session.is_admin()

    session.logout()
    assert not session.is_authenticated
    assert not session.is_admin()


def test_failed_login_leaves_session_empty(identities):
    session = SessionContext()
    AuthService(identities, HASHER).login(session, "admin", "nope")
    assert session.current is None


def test_legacy_digest_verifies_and_is_upgraded(identities):
    legacy = identities.add(
        name="Old", username="old", password="", password_hash=PasswordHasher.digest("pw123")
    )
    auth = AuthService(identities, HASHER)

    assert auth.verify("old", "pw123").ok
    assert not PasswordHasher.is_legacy(identities.stored_hash(legacy.id))
    assert auth.verify("old", "pw123").ok
    assert auth.verify("old", "other").failure == Failure.AUTH_MISMATCH


def test_hash_is_deterministic_hex_digest(identities):
    auth = AuthService(identities, HASHER)
    assert auth.hash("abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
    assert auth.hash("abc") == auth.hash("abc")


def test_employee_mutations_require_admin(identities):
    emp = identities.add(name="E", username="e", password="pw", hourly_rate="50")
    service = EmployeeService(identities, HASHER)
    employee_session = SessionContext(emp)

    assert service.create(employee_session, name="X", username="x", password="p", hourly_rate=1).failure == Failure.FORBIDDEN
    assert service.update(employee_session, emp.id, name="X", username="e", hourly_rate=1).failure == Failure.FORBIDDEN
    assert service.delete(employee_session, emp.id).failure == Failure.FORBIDDEN
    assert service.delete(SessionContext(), emp.id).failure == Failure.FORBIDDEN


@pytest.mark.parametrize(
    "fields, failure",
    [
        ({"name": "", "username": "u", "password": "p", "hourly_rate": "1"}, Failure.MISSING_FIELDS),
        ({"name": "N", "username": "  ", "password": "p", "hourly_rate": "1"}, Failure.MISSING_FIELDS),
        ({"name": "N", "username": "u", "password": "", "hourly_rate": "1"}, Failure.PASSWORD_REQUIRED),
        ({"name": "N", "username": "u", "password": "p", "hourly_rate": "-1"}, Failure.INVALID_RATE),
        ({"name": "N", "username": "u", "password": "p", "hourly_rate": "abc"}, Failure.INVALID_RATE),
    ],
)
def test_create_validation(identities, admin, fields, failure):
    outcome = EmployeeService(identities, HASHER).create(admin, **fields)
    assert outcome.failure == failure


def test_create_duplicate_username(identities, admin):
    service = EmployeeService(identities, HASHER)
    assert service.create(admin, name="A", username="kamal", password="p", hourly_rate="10").ok

    outcome = service.create(admin, name="B", username="kamal", password="q", hourly_rate="10")

    assert outcome.failure == Failure.DUPLICATE_USERNAME
    assert outcome.reason == "Username already exists"


def test_update_without_password_keeps_hash(identities, admin):
    service = EmployeeService(identities, HASHER)
    emp = service.create(admin, name="A", username="a", password="first", hourly_rate="10").unwrap()
    before = identities.stored_hash(emp.id)

    outcome = service.update(admin, emp.id, name="A2", username="a", hourly_rate="12.50", password=None)

    assert outcome.ok
    assert outcome.unwrap().hourly_rate == Decimal("12.50")
    assert identities.stored_hash(emp.id) == before


def test_update_password_round_trip(identities, admin):
    service = EmployeeService(identities, HASHER)
    auth = AuthService(identities, HASHER)
    emp = service.create(admin, name="A", username="a", password="first", hourly_rate="10").unwrap()

    assert service.update(admin, emp.id, name="A", username="a", hourly_rate="10", password="second").ok

    assert auth.verify("a", "second").ok
    assert auth.verify("a", "first").failure == Failure.AUTH_MISMATCH


def test_update_unknown_and_delete_unknown(identities, admin):
    service = EmployeeService(identities, HASHER)
    assert service.update(admin, 999, name="A", username="a", hourly_rate="1").failure == Failure.NOT_FOUND
    assert service.delete(admin, 999).failure == Failure.NOT_FOUND


def test_admin_identities_cannot_be_deleted(identities, admin):
    service = EmployeeService(identities, HASHER)
    other = identities.add(name="Second", username="second", password="pw", role=Role.ADMIN)

    assert service.delete(admin, admin.current.id).failure == Failure.ADMIN_PROTECTED
    outcome = service.delete(admin, other.id)

    assert outcome.failure == Failure.ADMIN_PROTECTED
    assert outcome.reason == "Administrator accounts cannot be deleted"
    assert identities.get_by_id(admin.current.id) and identities.get_by_id(other.id)


def test_list_employees_excludes_admins(identities, admin):
    service = EmployeeService(identities, HASHER)
    service.create(admin, name="B", username="b", password="p", hourly_rate="1")
    service.create(admin, name="C", username="c", password="p", hourly_rate="1")

    assert [i.username for i in service.list_employees()] == ["b", "c"]


def test_check_in_then_check_in_again_is_already_open(identities, fixed_now):
    emp = identities.add(name="E", username="e", password="pw")
    svc = AttendanceService(InMemoryAttendance(), identities)

    assert svc.check_in(emp.id, now=fixed_now).ok
    again = svc.check_in(emp.id, now=fixed_now + timedelta(minutes=1))

    assert again.failure == Failure.ALREADY_OPEN
    assert svc.is_open(emp.id)


def test_check_out_without_check_in(identities, fixed_now):
    emp = identities.add(name="E", username="e", password="pw")
    svc = AttendanceService(InMemoryAttendance(), identities)

    outcome = svc.check_out(emp.id, now=fixed_now)

    assert outcome.failure == Failure.NO_OPEN_SESSION
    assert not svc.is_open(emp.id)


def test_check_in_unknown_employee(identities, fixed_now):
    svc = AttendanceService(InMemoryAttendance(), identities)
    assert svc.check_in(42, now=fixed_now).failure == Failure.NOT_FOUND


def test_check_out_returns_duration(identities, fixed_now):
    emp = identities.add(name="E", username="e", password="pw")
    svc = AttendanceService(InMemoryAttendance(), identities)
    svc.check_in(emp.id, now=fixed_now)

    closed = svc.check_out(emp.id, now=fixed_now + timedelta(hours=8, minutes=30)).unwrap()

    assert closed.duration == timedelta(hours=8, minutes=30)
    assert closed.hours == pytest.approx(8.5)
    assert svc.get_status(emp.id) is None
