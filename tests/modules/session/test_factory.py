"""
Tests for controller wiring and the singleton getter.
"""

import pytest

from shared.config import Settings
from modules.biometrics.models import BiometricKind
from modules.session.models import AuthenticationStatus
from modules.session.service import (
    SessionController,
    create_session_controller,
    get_session_controller,
    reset_session_controller,
)


class TestCreateSessionController:
    @pytest.mark.asyncio
    async def test_wires_from_settings(self, tmp_path):
        """Should load providers from the configured file."""
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
        controller = create_session_controller(
            Settings(_env_file=None, providers_config_path=path)
        )

        await controller.load_configuration()

        assert controller.selected_provider.id == "keycloak"
        assert controller.biometric_kind() == BiometricKind.NONE
        await controller.aclose()

    @pytest.mark.asyncio
    async def test_missing_provider_file(self, tmp_path):
        """A missing provider file should surface as a configuration error."""
        controller = create_session_controller(
            Settings(_env_file=None, providers_config_path=tmp_path / "missing.yaml")
        )

        await controller.load_configuration()

        assert controller.state.status == AuthenticationStatus.ERROR
        assert controller.state.error.code == "CONFIGURATION_ERROR"


class TestSessionControllerSingleton:
    def test_same_instance(self):
        """get_session_controller should return one instance."""
        controller = get_session_controller()
        assert isinstance(controller, SessionController)
        assert get_session_controller() is controller

    def test_reset(self):
        """reset_session_controller should drop the instance."""
        first = get_session_controller()
        reset_session_controller()
        assert get_session_controller() is not first
