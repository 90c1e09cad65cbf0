from __future__ import annotations

from decimal import Decimal
from typing import Optional, Protocol, Sequence, Tuple

from ..core.enums import Role
from .model import Identity


class IdentityRepository(Protocol):
    """Repository interface for identities.

    Note (DIP): services depend on this interface, not on SQLite directly.
    """

    def get_by_id(self, employee_id: int) -> Optional[Identity]:
        raise NotImplementedError

    def get_credentials(self, username: str) -> Optional[Tuple[Identity, str]]:
        """Identity plus stored password hash, for verification only."""
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        username: str,
        password_hash: str,
        hourly_rate: Decimal,
        role: Role,
    ) -> Optional[int]:
        """Insert and return the new id, or None if the username is taken."""
        raise NotImplementedError

    def update(
        self,
        *,
        employee_id: int,
        name: str,
        username: str,
        hourly_rate: Decimal,
        password_hash: Optional[str] = None,
    ) -> bool:
        """Returns False if ``username`` belongs to another identity."""
        raise NotImplementedError

    def set_password_hash(self, employee_id: int, password_hash: str) -> bool:
        raise NotImplementedError

    def delete_by_id(self, employee_id: int) -> bool:
        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[Identity]:
        raise NotImplementedError
