from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence, Union

from ..common.passwords import PasswordHasher
from ..common.validators import check_identity_fields, is_blank, parse_hourly_rate
from ..core.enums import Role
from ..core.logging import get_logger
from ..core.outcome import Failure, Outcome
from .model import Identity
from .repository import IdentityRepository
from .session import SessionContext

logger = get_logger(__name__)

RateInput = Union[str, int, float, Decimal]


class AuthService:
    """Use case: verify login credentials."""

    def __init__(self, identities: IdentityRepository, hasher: Optional[PasswordHasher] = None):
        self._identities = identities
        self._hasher = hasher or PasswordHasher()

    def hash(self, password: str) -> str:
        return self._hasher.digest(password)

    def verify(self, username: str, password: str) -> Outcome[Identity]:
        found = self._identities.get_credentials(username)
        if not found:
            logger.info("login rejected: unknown username %r", username)
            return Outcome.fail(Failure.AUTH_NOT_FOUND)

        identity, stored_hash = found
        if not self._hasher.verify(password, stored_hash):
            logger.info("login rejected: wrong password for %r", username)
            return Outcome.fail(Failure.AUTH_MISMATCH)

        if self._hasher.needs_rehash(stored_hash):
            self._identities.set_password_hash(identity.id, self._hasher.hash(password))
            logger.info("upgraded legacy password digest for %r", username)

        logger.info("login ok: %r (%s)", username, identity.role.value)
        return Outcome.success(identity)

    def login(self, session: SessionContext, username: str, password: str) -> Outcome[Identity]:
        """``verify`` and, on success, hold the identity in ``session``."""
        outcome = self.verify(username, password)
        if outcome.ok:
            session.login(outcome.unwrap())
        return outcome


class EmployeeService:
    """Use case: manage identities (admin only)."""

    def __init__(self, identities: IdentityRepository, hasher: Optional[PasswordHasher] = None):
        self._identities = identities
        self._hasher = hasher or PasswordHasher()

    def get(self, employee_id: int) -> Optional[Identity]:
        return self._identities.get_by_id(employee_id)

    def list_employees(self) -> Sequence[Identity]:
        """Employee-role identities ordered by id; admins are not listed."""
        return self._identities.list_by_role(Role.EMPLOYEE)

    def create(
        self,
        session: SessionContext,
        *,
        name: str,
        username: str,
        password: str,
        hourly_rate: RateInput,
        role: Role = Role.EMPLOYEE,
    ) -> Outcome[Identity]:
        if not session.is_admin():
            return Outcome.fail(Failure.FORBIDDEN)

        failure = check_identity_fields(name=name, username=username)
        if failure:
            return Outcome.fail(failure)
        if is_blank(password):
            return Outcome.fail(Failure.PASSWORD_REQUIRED)
        rate = parse_hourly_rate(hourly_rate)
        if rate is None:
            return Outcome.fail(Failure.INVALID_RATE)

        new_id = self._identities.create(
            name=name.strip(),
            username=username.strip(),
            password_hash=self._hasher.hash(password),
            hourly_rate=rate,
            role=Role(role),
        )
        if new_id is None:
            return Outcome.fail(Failure.DUPLICATE_USERNAME)

        logger.info("identity %d (%r) created by %r", new_id, username.strip(), session.current.username)
        return Outcome.success(
            Identity(id=new_id, name=name.strip(), username=username.strip(), hourly_rate=rate, role=Role(role))
        )

    def update(
        self,
        session: SessionContext,
        employee_id: int,
        *,
        name: str,
        username: str,
        hourly_rate: RateInput,
        password: Optional[str] = None,
    ) -> Outcome[Identity]:
        """Update profile fields; a missing or empty password keeps the stored hash."""
        if not session.is_admin():
            return Outcome.fail(Failure.FORBIDDEN)

        existing = self._identities.get_by_id(employee_id)
        if not existing:
            return Outcome.fail(Failure.NOT_FOUND)

        failure = check_identity_fields(name=name, username=username)
        if failure:
            return Outcome.fail(failure)
        rate = parse_hourly_rate(hourly_rate)
        if rate is None:
            return Outcome.fail(Failure.INVALID_RATE)

        password_hash = None if is_blank(password) else self._hasher.hash(password)
        if not self._identities.update(
            employee_id=existing.id,
            name=name.strip(),
            username=username.strip(),
            hourly_rate=rate,
            password_hash=password_hash,
        ):
            return Outcome.fail(Failure.DUPLICATE_USERNAME)

        logger.info(
            "identity %d updated by %r%s",
            existing.id,
            session.current.username,
            " (password changed)" if password_hash else "",
        )
        return Outcome.success(
            Identity(id=existing.id, name=name.strip(), username=username.strip(), hourly_rate=rate, role=existing.role)
        )

    def delete(self, session: SessionContext, employee_id: int) -> Outcome[int]:
        """Remove the identity row only; its attendance rows are kept.

        Admin identities are never deleted.
        """
        if not session.is_admin():
            return Outcome.fail(Failure.FORBIDDEN)

        target = self._identities.get_by_id(employee_id)
        if not target:
            return Outcome.fail(Failure.NOT_FOUND)
        if target.role == Role.ADMIN:
            return Outcome.fail(Failure.ADMIN_PROTECTED)

        if not self._identities.delete_by_id(target.id):
            return Outcome.fail(Failure.NOT_FOUND)

        logger.info("identity %d deleted by %r", int(employee_id), session.current.username)
        return Outcome.success(int(employee_id))
