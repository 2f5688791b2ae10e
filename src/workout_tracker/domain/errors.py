"""Errors raised by storage adapters."""


class StorageError(RuntimeError):
    """Raised when the backing store fails or returns no rows for a write."""
