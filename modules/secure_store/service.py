"""
Secure store implementation.

Typed, namespaced key-value storage over a secret backend.
"""

import logging
from typing import Optional, TypeVar

from pydantic import ValidationError

from shared.config import Settings

from .interfaces import ISecretBackend, ISecureStore
from .models import StoreKey
from .backends import EncryptedFileSecretBackend, InMemorySecretBackend
from .exceptions import CorruptRecordError, SecureStorageError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SecureStore(ISecureStore):
    """
    Secure store bound to a single namespace.

    Two stores on the same backend but different namespaces cannot see or
    delete each other's records.
    """

    def __init__(self, backend: ISecretBackend, namespace: str):
        if not namespace:
            raise ValueError("namespace cannot be empty")
        self._backend = backend
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    async def store(self, key: StoreKey[T], value: T) -> None:
        """Encode and store a value, replacing any previous one."""
        try:
            data = key.encode(value)
        except (ValueError, TypeError) as e:
            raise SecureStorageError("encode_failed", f"Cannot encode {key.name}: {e}", key=key.name)
        self._backend.write(self._namespace, key.name, data)

    async def retrieve(self, key: StoreKey[T]) -> Optional[T]:
        """Retrieve and decode a value; None when absent."""
        data = self._backend.read(self._namespace, key.name)
        if data is None:
            return None
        try:
            return key.decode(data)
        except ValidationError as e:
            raise CorruptRecordError(key.name, str(e.errors()[0].get("msg", e)))

    async def delete(self, key: StoreKey) -> None:
        self._backend.remove(self._namespace, key.name)

    async def delete_all(self) -> None:
        removed = self._backend.remove_service(self._namespace)
        logger.debug(f"Cleared {removed} record(s) from namespace {self._namespace}")


def create_secret_backend(settings: Settings) -> ISecretBackend:
    """Create the secret backend selected by settings."""
    backend = settings.secure_store_backend.lower()
    if backend == "memory":
        return InMemorySecretBackend()
    if backend == "file":
        return EncryptedFileSecretBackend(settings.secure_store_path, settings.secure_store_key)
    raise ValueError(
        f"Unknown secure store backend '{settings.secure_store_backend}'. "
        "Valid backends: memory, file"
    )


def create_secure_store(backend: ISecretBackend, namespace: str) -> SecureStore:
    """Create a secure store bound to a namespace."""
    return SecureStore(backend, namespace)
