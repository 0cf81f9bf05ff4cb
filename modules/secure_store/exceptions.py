"""
Secure store module exceptions.

"Not found" is never an error here: reads of absent keys return None and
deletes of absent keys succeed.
"""

from typing import Optional

from shared.exceptions import StorageError


class SecureStorageError(StorageError):
    """Raised when the secret backend fails; carries the backend status."""

    def __init__(self, status: str, message: Optional[str] = None, key: Optional[str] = None):
        super().__init__(status, message)
        if key:
            self.details["key"] = key


class CorruptRecordError(SecureStorageError):
    """Raised when a stored record cannot be decoded into its declared type."""

    def __init__(self, key: str, message: str):
        super().__init__(
            "decode_failed",
            f"Stored record '{key}' could not be decoded: {message}",
            key=key,
        )


class InvalidStorageKeyError(SecureStorageError):
    """Raised when a namespace or key name is not usable by the backend."""

    def __init__(self, name: str):
        super().__init__("invalid_key", f"Invalid storage name: {name!r}")
