"""
Secure store module.

Namespaced, typed secret storage with atomic overwrite and bulk wipe.

Public API:
- ISecureStore / ISecretBackend: Interfaces
- SecureStore: Typed store bound to one namespace
- StoreKey, StorageKeys, PreferenceKeys: Typed keys
- Backends: InMemorySecretBackend, EncryptedFileSecretBackend
- Exceptions: SecureStorageError, CorruptRecordError, InvalidStorageKeyError
"""

from .interfaces import ISecretBackend, ISecureStore
from .models import PreferenceKeys, StorageKeys, StoreKey
from .backends import EncryptedFileSecretBackend, InMemorySecretBackend
from .service import SecureStore, create_secret_backend, create_secure_store
from .exceptions import (
    CorruptRecordError,
    InvalidStorageKeyError,
    SecureStorageError,
)

__all__ = [
    # Interfaces
    "ISecretBackend",
    "ISecureStore",
    # Models
    "StoreKey",
    "StorageKeys",
    "PreferenceKeys",
    # Implementations
    "SecureStore",
    "InMemorySecretBackend",
    "EncryptedFileSecretBackend",
    "create_secret_backend",
    "create_secure_store",
    # Exceptions
    "SecureStorageError",
    "CorruptRecordError",
    "InvalidStorageKeyError",
]
