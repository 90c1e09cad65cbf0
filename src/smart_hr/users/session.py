from __future__ import annotations

from typing import Optional

from .model import Identity


class SessionContext:
    """The authenticated identity for one desktop session or one request.

    Passed explicitly to every admin-gated operation; nothing in the package
    keeps a process-wide "current user".
    """

    def __init__(self, identity: Optional[Identity] = None):
        self._identity = identity

    @property
    def current(self) -> Optional[Identity]:
        return self._identity

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def login(self, identity: Identity) -> None:
        self._identity = identity

    def logout(self) -> None:
        self._identity = None

    def is_admin(self) -> bool:
        return self._identity is not None and self._identity.is_admin

    def is_self(self, employee_id: int) -> bool:
        return self._identity is not None and self._identity.id == int(employee_id)

    def __repr__(self) -> str:
        who = self._identity.username if self._identity else None
        return f"SessionContext(user={who!r})"
