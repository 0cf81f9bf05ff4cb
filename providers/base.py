"""Base classes and models for identity providers."""

from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol, runtime_checkable
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


SECURE_SCHEME = "https"


class IdentityProvider(BaseModel):
    """OAuth provider descriptor, parsed from one configuration entry.

    Accepts the camelCase keys used by provider configuration files
    (``displayName``, ``tokenEndpoint``...) as well as the field names.

    Attributes:
        id: Stable identifier, persisted as the selected provider
        name: Short name
        display_name: Name shown to users
        authorization_endpoint: Authorization URL (https)
        token_endpoint: Token URL used for password and refresh grants (https)
        user_info_endpoint: Optional userinfo URL (https)
        client_id: OAuth client id
        scope: Space separated scopes requested on login
        is_default: Marks the catalog default
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    id: str
    name: str
    display_name: str
    authorization_endpoint: str
    token_endpoint: str
    user_info_endpoint: Optional[str] = None
    client_id: str
    scope: str
    is_default: bool = False

    @field_validator("id", "name", "client_id", "scope")
    @classmethod
    def _not_empty(cls, value: str, info) -> str:
        if not value:
            raise ValueError(f"{info.field_name} cannot be empty")
        return value

    @field_validator("authorization_endpoint", "token_endpoint", "user_info_endpoint")
    @classmethod
    def _secure_url(cls, value: Optional[str], info) -> Optional[str]:
        if value is None:
            return value
        parsed = urlparse(value)
        if parsed.scheme != SECURE_SCHEME or not parsed.netloc:
            raise ValueError(f"{info.field_name} must be an {SECURE_SCHEME} URL")
        return value


class ProviderSource(ABC):
    """Abstract source of raw provider entries.

    The catalog does not care where entries come from (a bundled file,
    a test fixture...), only that each entry is a mapping.
    """

    @abstractmethod
    def load_entries(self) -> list[dict[str, Any]]:
        """Return the raw provider entries in load order.

        Raises:
            ProviderSourceError: If the source cannot be read or parsed
        """
        pass

    @property
    def description(self) -> str:
        return self.__class__.__name__


@runtime_checkable
class IProviderCatalog(Protocol):
    """
    Interface for the identity provider catalog.

    The session controller depends on this, not on ProviderCatalog.
    """

    def load_providers(self) -> list[IdentityProvider]:
        """
        Load and validate all configured providers.

        Returns:
            Providers in load order

        Raises:
            ConfigurationError: If the list is empty or any entry is invalid
        """
        ...

    def get_default_provider(self) -> IdentityProvider:
        """
        Get the default provider.

        The entry flagged ``is_default`` wins; otherwise the first entry.
        """
        ...

    def get_provider(self, provider_id: str) -> IdentityProvider:
        """
        Get a provider by id.

        Raises:
            ProviderNotFoundError: If no provider has that id
        """
        ...
