"""
Tests for the identity provider catalog.
"""

import pytest

from providers.base import IdentityProvider
from providers.catalog import ProviderCatalog, load_provider_catalog
from providers.sources import StaticProviderSource, FileProviderSource
from providers.exceptions import (
    EmptyProviderCatalogError,
    ProviderNotFoundError,
    ProviderSourceError,
    ProviderValidationError,
)
from shared.exceptions import ConfigurationError


class TestIdentityProvider:
    def test_camel_case_keys(self, provider_entries):
        """Should accept camelCase configuration keys."""
        provider = IdentityProvider.model_validate(provider_entries[0])
        assert provider.display_name == "Company SSO"
        assert provider.token_endpoint == "https://sso.example.com/token"
        assert provider.client_id == "mobile-app"
        assert provider.is_default is False

    def test_field_names(self):
        """Should accept snake_case field names too."""
        provider = IdentityProvider(
            id="p",
            name="P",
            display_name="P",
            authorization_endpoint="https://p.example.com/auth",
            token_endpoint="https://p.example.com/token",
            client_id="c",
            scope="openid",
        )
        assert provider.user_info_endpoint is None

    @pytest.mark.parametrize("field", ["id", "name", "clientId", "scope"])
    def test_empty_required_field_rejected(self, provider_entries, field):
        """Should reject whitespace-only identifying fields."""
        entry = dict(provider_entries[0], **{field: "   "})
        with pytest.raises(ValueError):
            IdentityProvider.model_validate(entry)

    @pytest.mark.parametrize(
        "field", ["authorizationEndpoint", "tokenEndpoint", "userInfoEndpoint"]
    )
    def test_insecure_url_rejected(self, provider_entries, field):
        """Should reject plain http endpoints."""
        entry = dict(provider_entries[0], **{field: "http://sso.example.com/x"})
        with pytest.raises(ValueError):
            IdentityProvider.model_validate(entry)

    def test_malformed_url_rejected(self, provider_entries):
        """Should reject a URL with no host."""
        entry = dict(provider_entries[0], tokenEndpoint="https://")
        with pytest.raises(ValueError):
            IdentityProvider.model_validate(entry)


class TestProviderCatalog:
    def test_load_providers(self, catalog):
        """Should load entries in order."""
        providers = catalog.load_providers()
        assert [p.id for p in providers] == ["keycloak", "okta"]

    def test_default_flag_wins(self, catalog):
        """The flagged entry should be the default even when not first."""
        assert catalog.get_default_provider().id == "okta"

    def test_first_entry_is_default_without_flag(self, provider_entries):
        """Without a flag the first entry should be the default."""
        entries = [dict(e, isDefault=False) for e in provider_entries]
        catalog = ProviderCatalog(StaticProviderSource(entries))
        assert catalog.get_default_provider().id == "keycloak"

    def test_get_provider(self, catalog):
        """Should find a provider by id."""
        assert catalog.get_provider("keycloak").name == "Keycloak"

    def test_get_unknown_provider(self, catalog):
        """Should raise ProviderNotFoundError for an unknown id."""
        with pytest.raises(ProviderNotFoundError) as exc_info:
            catalog.get_provider("missing")
        assert exc_info.value.provider_id == "missing"

    def test_empty_catalog(self):
        """An empty list is a configuration error."""
        catalog = ProviderCatalog(StaticProviderSource([]))
        with pytest.raises(EmptyProviderCatalogError) as exc_info:
            catalog.load_providers()
        assert isinstance(exc_info.value, ConfigurationError)
        assert exc_info.value.code == "CONFIGURATION_ERROR"

    def test_one_invalid_entry_fails_whole_load(self, provider_entries):
        """A single bad entry should fail the entire load."""
        entries = [provider_entries[0], dict(provider_entries[1], tokenEndpoint="http://x.com")]
        catalog = ProviderCatalog(StaticProviderSource(entries))
        with pytest.raises(ProviderValidationError) as exc_info:
            catalog.load_providers()
        assert "#2" in exc_info.value.message
        assert exc_info.value.provider_id == "okta"

    def test_duplicate_ids_rejected(self, provider_entries):
        """Should reject two entries with the same id."""
        entries = [provider_entries[0], dict(provider_entries[1], id="keycloak")]
        catalog = ProviderCatalog(StaticProviderSource(entries))
        with pytest.raises(ProviderValidationError):
            catalog.load_providers()

    def test_loads_once(self, provider_entries):
        """Should read the source only on first use."""
        source = StaticProviderSource(provider_entries)
        catalog = ProviderCatalog(source)
        catalog.load_providers()
        source._entries = []
        assert len(catalog.load_providers()) == 2


class TestFileProviderSource:
    def test_yaml_list(self, tmp_path):
        """Should read a top-level YAML list."""
        path = tmp_path / "providers.yaml"
        path.write_text(
            "- id: keycloak\n"
            "  name: Keycloak\n"
            "  displayName: Company SSO\n"
            "  authorizationEndpoint: https://sso.example.com/auth\n"
            "  tokenEndpoint: https://sso.example.com/token\n"
            "  clientId: mobile-app\n"
            "  scope: openid\n"
        )
        catalog = load_provider_catalog(path)
        assert catalog.get_default_provider().id == "keycloak"

    def test_yaml_mapping(self, tmp_path):
        """Should read a mapping with a providers list."""
        path = tmp_path / "providers.yaml"
        path.write_text(
            "providers:\n"
            "  - id: okta\n"
            "    name: Okta\n"
            "    displayName: Okta\n"
            "    authorizationEndpoint: https://okta.example.com/authorize\n"
            "    tokenEndpoint: https://okta.example.com/token\n"
            "    clientId: okta-client\n"
            "    scope: openid\n"
        )
        assert [p.id for p in load_provider_catalog(path).load_providers()] == ["okta"]

    def test_empty_file(self, tmp_path):
        """An empty file yields an empty catalog error."""
        path = tmp_path / "providers.yaml"
        path.write_text("")
        with pytest.raises(EmptyProviderCatalogError):
            load_provider_catalog(path).load_providers()

    def test_missing_file(self, tmp_path):
        """Should raise ProviderSourceError for a missing file."""
        source = FileProviderSource(tmp_path / "missing.yaml")
        with pytest.raises(ProviderSourceError):
            source.load_entries()

    def test_invalid_yaml(self, tmp_path):
        """Should raise ProviderSourceError for malformed YAML."""
        path = tmp_path / "providers.yaml"
        path.write_text("- id: [unclosed\n")
        with pytest.raises(ProviderSourceError):
            FileProviderSource(path).load_entries()

    def test_wrong_shape(self, tmp_path):
        """Should reject a document that is not a list of mappings."""
        path = tmp_path / "providers.yaml"
        path.write_text("providers: just-a-string\n")
        with pytest.raises(ProviderSourceError):
            FileProviderSource(path).load_entries()
