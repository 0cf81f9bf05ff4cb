"""Identity provider catalog: loading, validation and default selection."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .base import IdentityProvider, IProviderCatalog, ProviderSource
from .exceptions import (
    EmptyProviderCatalogError,
    ProviderNotFoundError,
    ProviderValidationError,
)
from .sources import FileProviderSource

logger = logging.getLogger(__name__)


def _describe_validation_error(error: ValidationError) -> str:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first.get("loc", ())) or "entry"
    return f"{field}: {first.get('msg', 'invalid value')}"


class ProviderCatalog(IProviderCatalog):
    """
    Static list of identity providers.

    Entries are loaded once, on first use, and validated as a whole: a
    single bad entry fails the entire load so the application never runs
    with a partial provider list.
    """

    def __init__(self, source: ProviderSource):
        self._source = source
        self._providers: Optional[list[IdentityProvider]] = None

    def load_providers(self) -> list[IdentityProvider]:
        if self._providers is None:
            self._providers = self._load()
        return list(self._providers)

    def get_default_provider(self) -> IdentityProvider:
        providers = self.load_providers()
        for provider in providers:
            if provider.is_default:
                return provider
        return providers[0]

    def get_provider(self, provider_id: str) -> IdentityProvider:
        for provider in self.load_providers():
            if provider.id == provider_id:
                return provider
        raise ProviderNotFoundError(provider_id)

    def _load(self) -> list[IdentityProvider]:
        entries = self._source.load_entries()
        if not entries:
            raise EmptyProviderCatalogError()

        providers: list[IdentityProvider] = []
        seen: set[str] = set()
        for index, entry in enumerate(entries):
            try:
                provider = IdentityProvider.model_validate(entry)
            except ValidationError as e:
                raise ProviderValidationError(
                    f"Invalid provider entry #{index + 1}: {_describe_validation_error(e)}",
                    provider_id=entry.get("id"),
                )
            if provider.id in seen:
                raise ProviderValidationError(
                    f"Duplicate provider id: {provider.id}",
                    provider_id=provider.id,
                )
            seen.add(provider.id)
            providers.append(provider)

        logger.info(
            f"Loaded {len(providers)} identity provider(s) from {self._source.description}"
        )
        return providers


def load_provider_catalog(path: Path) -> ProviderCatalog:
    """Create a catalog backed by a provider configuration file.

    Args:
        path: YAML or JSON file listing the providers

    Returns:
        ProviderCatalog that reads the file on first use
    """
    return ProviderCatalog(FileProviderSource(path))
