"""
Identity provider catalog exceptions.

All of these are configuration errors: the session controller surfaces
them as Error(configuration) rather than falling back to a broken provider.
"""

from typing import Optional

from shared.exceptions import ConfigurationError


class ProviderValidationError(ConfigurationError):
    """Raised when a provider entry fails validation."""

    def __init__(self, message: str, provider_id: Optional[str] = None):
        super().__init__(
            message,
            details={"provider_id": provider_id} if provider_id else None,
        )
        self.provider_id = provider_id


class EmptyProviderCatalogError(ConfigurationError):
    """Raised when the configuration lists no providers at all."""

    def __init__(self):
        super().__init__("No identity providers configured")


class ProviderNotFoundError(ConfigurationError):
    """Raised when a provider id is not in the catalog."""

    def __init__(self, provider_id: str):
        super().__init__(
            f"Unknown identity provider: {provider_id}",
            details={"provider_id": provider_id},
        )
        self.provider_id = provider_id


class ProviderSourceError(ConfigurationError):
    """Raised when the provider configuration source cannot be read or parsed."""

    def __init__(self, source: str, message: str):
        super().__init__(
            f"Failed to load identity providers from {source}: {message}",
            details={"source": source},
        )
