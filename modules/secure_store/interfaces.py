"""
Secure store module interfaces.

ISecureStore is what the rest of the system depends on: a typed key-value
store bound to one namespace. ISecretBackend is the platform primitive
underneath it, addressed by (service, account) and dealing only in bytes.
"""

from typing import Optional, Protocol, TypeVar, runtime_checkable

from .models import StoreKey

T = TypeVar("T")


@runtime_checkable
class ISecretBackend(Protocol):
    """
    Interface for a secret-storage primitive.

    ``service`` is the isolation boundary: nothing written under one
    service is readable or deletable through another.
    """

    def write(self, service: str, account: str, data: bytes) -> None:
        """
        Store data, replacing any existing value atomically.

        Raises:
            SecureStorageError: If the backend cannot store the value
        """
        ...

    def read(self, service: str, account: str) -> Optional[bytes]:
        """
        Read data.

        Returns:
            The stored bytes, or None if nothing is stored

        Raises:
            SecureStorageError: If the backend fails for any other reason
        """
        ...

    def remove(self, service: str, account: str) -> bool:
        """
        Remove one entry.

        Returns:
            True if an entry was removed, False if none existed
        """
        ...

    def remove_service(self, service: str) -> int:
        """
        Remove every entry under a service.

        Returns:
            Number of entries removed
        """
        ...


@runtime_checkable
class ISecureStore(Protocol):
    """
    Interface for namespaced, typed secure storage.

    The session controller persists tokens, the user and the selected
    provider through this; the biometric gate persists its preferences
    through a second instance on a different namespace.
    """

    @property
    def namespace(self) -> str:
        """The namespace this store is bound to."""
        ...

    async def store(self, key: StoreKey[T], value: T) -> None:
        """
        Store a value, overwriting atomically.

        Raises:
            SecureStorageError: If the value cannot be stored
        """
        ...

    async def retrieve(self, key: StoreKey[T]) -> Optional[T]:
        """
        Retrieve a value.

        Returns:
            The decoded value, or None if the key is absent

        Raises:
            CorruptRecordError: If the stored bytes do not decode to the key's type
            SecureStorageError: If the backend fails
        """
        ...

    async def delete(self, key: StoreKey) -> None:
        """Delete a value. Deleting an absent key is not an error."""
        ...

    async def delete_all(self) -> None:
        """Delete every value in this store's namespace only."""
        ...
