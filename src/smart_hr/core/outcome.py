"""Explicit success/failure results for expected business conditions.

Services return an :class:`Outcome` instead of raising for things like a wrong
password or a second check-in; callers branch on ``outcome.ok``. Only storage
failures raise (see ``core.exceptions``).
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

T = TypeVar("T")


class Failure(str, Enum):
    AUTH_NOT_FOUND = "auth_not_found"
    AUTH_MISMATCH = "auth_mismatch"
    DUPLICATE_USERNAME = "duplicate_username"
    ALREADY_OPEN = "already_open"
    NO_OPEN_SESSION = "no_open_session"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    MISSING_FIELDS = "missing_fields"
    PASSWORD_REQUIRED = "password_required"
    INVALID_RATE = "invalid_rate"
    ADMIN_PROTECTED = "admin_protected"

    @property
    def message(self) -> str:
        return _MESSAGES[self]


_MESSAGES = {
    Failure.AUTH_NOT_FOUND: "Unknown username",
    Failure.AUTH_MISMATCH: "Incorrect password",
    Failure.DUPLICATE_USERNAME: "Username already exists",
    Failure.ALREADY_OPEN: "Already checked in",
    Failure.NO_OPEN_SESSION: "Not checked in",
    Failure.NOT_FOUND: "Employee record not found",
    Failure.FORBIDDEN: "Administrator privileges required",
    Failure.MISSING_FIELDS: "Name and username are required",
    Failure.PASSWORD_REQUIRED: "Password is required for new employees",
    Failure.INVALID_RATE: "Hourly rate must be a non-negative number",
    Failure.ADMIN_PROTECTED: "Administrator accounts cannot be deleted",
}


@dataclass(frozen=True)
class Outcome(Generic[T]):
    value: Optional[T] = None
    failure: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def reason(self) -> str:
        return self.failure.message if self.failure else ""

    def unwrap(self) -> T:
        """Return the value; raises ``ValueError`` if this is a failure."""
        if self.failure is not None:
            raise ValueError(f"unwrap() on failed outcome: {self.failure.value}")
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, failure: Failure) -> "Outcome[T]":
        return cls(failure=failure)
