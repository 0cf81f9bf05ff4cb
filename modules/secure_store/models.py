"""
Secure store keys.

A StoreKey binds a storage key name to the type stored under it, so values
go in and come out through one encode/decode pair instead of ad hoc JSON.
"""

from typing import Generic, TypeVar

from pydantic import TypeAdapter

from shared.models import AuthTokens, User

T = TypeVar("T")


class StoreKey(Generic[T]):
    """Typed key: ``StoreKey("user", User)``."""

    def __init__(self, name: str, value_type: type[T]):
        self.name = name
        self.value_type = value_type
        self._adapter: TypeAdapter[T] = TypeAdapter(value_type)

    def encode(self, value: T) -> bytes:
        return self._adapter.dump_json(value)

    def decode(self, data: bytes) -> T:
        return self._adapter.validate_json(data)

    def __repr__(self) -> str:
        return f"StoreKey({self.name!r}, {getattr(self.value_type, '__name__', self.value_type)})"


class StorageKeys:
    """Records persisted under the auth namespace."""

    AUTH_TOKENS: StoreKey[AuthTokens] = StoreKey("auth_tokens", AuthTokens)
    USER: StoreKey[User] = StoreKey("user", User)
    SELECTED_PROVIDER: StoreKey[str] = StoreKey("selected_provider", str)


class PreferenceKeys:
    """Records persisted under the preferences namespace."""

    BIOMETRIC_AUTH_ENABLED: StoreKey[bool] = StoreKey("biometric_auth_enabled", bool)
    BIOMETRIC_SETUP_PROMPTED: StoreKey[bool] = StoreKey("biometric_setup_prompted", bool)
