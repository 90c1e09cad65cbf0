from __future__ import annotations

import hashlib
import hmac
import re
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

_LEGACY_DIGEST = re.compile(r"^[0-9a-f]{64}$")


class PasswordHasher:
    """Hashes and verifies employee passwords.

    New credentials are stored as werkzeug salted hashes. Databases created by
    the old desktop build hold an unsalted SHA-256 hex digest instead; those
    still verify, and ``needs_rehash`` flags them for upgrade.
    """

    def __init__(self, method: Optional[str] = None):
        self._method = method

    @staticmethod
    def digest(password: str) -> str:
        """Deterministic lowercase hex SHA-256 of the UTF-8 password."""
        return hashlib.sha256(password.encode("utf-8")).hexdigest()

    @staticmethod
    def is_legacy(stored_hash: str) -> bool:
        return bool(_LEGACY_DIGEST.match(stored_hash or ""))

    def hash(self, password: str) -> str:
        if self._method:
            return generate_password_hash(password, method=self._method)
        return generate_password_hash(password)

    def verify(self, password: str, stored_hash: str) -> bool:
        if not stored_hash:
            return False
        if self.is_legacy(stored_hash):
            return hmac.compare_digest(self.digest(password), stored_hash)
        try:
            return check_password_hash(stored_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            return False

    def needs_rehash(self, stored_hash: str) -> bool:
        return self.is_legacy(stored_hash)
