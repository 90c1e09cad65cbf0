class DomainError(Exception):
    """Base exception for conditions the caller cannot branch on."""


class StorageError(DomainError):
    """Raised when the SQLite store fails (I/O, locking, corrupt schema)."""
