"""Identity provider descriptors and the provider catalog."""

from .base import IdentityProvider, IProviderCatalog, ProviderSource
from .catalog import ProviderCatalog, load_provider_catalog
from .sources import FileProviderSource, StaticProviderSource
from .exceptions import (
    EmptyProviderCatalogError,
    ProviderNotFoundError,
    ProviderSourceError,
    ProviderValidationError,
)

__all__ = [
    "IdentityProvider",
    "IProviderCatalog",
    "ProviderSource",
    "ProviderCatalog",
    "load_provider_catalog",
    "FileProviderSource",
    "StaticProviderSource",
    "EmptyProviderCatalogError",
    "ProviderNotFoundError",
    "ProviderSourceError",
    "ProviderValidationError",
]
