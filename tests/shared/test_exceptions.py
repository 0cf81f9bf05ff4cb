"""Tests for shared/exceptions.py."""

import pytest

from shared.exceptions import (
    IdpAuthError,
    AuthenticationError,
    InvalidCredentialsError,
    TokenExpiredError,
    ServerError,
    NetworkError,
    ConfigurationError,
    BiometricAuthenticationFailedError,
    StorageError,
    UnknownError,
)


class TestIdpAuthError:
    def test_message(self):
        """IdpAuthError should store message."""
        error = IdpAuthError("Test error")
        assert error.message == "Test error"
        assert str(error) == "Test error"

    def test_default_code(self):
        """IdpAuthError should default code to class name."""
        error = IdpAuthError("Test error")
        assert error.code == "IdpAuthError"

    def test_custom_details(self):
        """IdpAuthError should accept custom details."""
        error = IdpAuthError("Test error", details={"key": "value"})
        assert error.details == {"key": "value"}

    def test_to_dict(self):
        """IdpAuthError should convert to dict."""
        error = IdpAuthError("Test error", code="TEST_ERROR")
        result = error.to_dict()

        assert result["error"] == "TEST_ERROR"
        assert result["message"] == "Test error"
        assert result["details"] == {}


class TestAuthenticationErrors:
    @pytest.mark.parametrize(
        "error,code",
        [
            (InvalidCredentialsError(), "INVALID_CREDENTIALS"),
            (TokenExpiredError(), "TOKEN_EXPIRED"),
            (ServerError(500), "SERVER_ERROR"),
            (NetworkError(OSError("down")), "NETWORK_ERROR"),
            (ConfigurationError("bad"), "CONFIGURATION_ERROR"),
            (BiometricAuthenticationFailedError(), "BIOMETRIC_AUTHENTICATION_FAILED"),
            (StorageError("io_error"), "STORAGE_ERROR"),
            (UnknownError(RuntimeError("boom")), "UNKNOWN_ERROR"),
        ],
    )
    def test_codes(self, error, code):
        """Each category should carry its stable code."""
        assert isinstance(error, AuthenticationError)
        assert error.code == code

    def test_server_error_message(self):
        """ServerError should include status and body."""
        error = ServerError(503, "maintenance")
        assert error.status == 503
        assert error.message == "Server error (503): maintenance"

    def test_server_error_without_body(self):
        """ServerError should fall back to a generic body."""
        assert ServerError(500).message == "Server error (500): Unknown error"

    def test_configuration_error_prefix(self):
        """ConfigurationError should prefix its reason."""
        error = ConfigurationError("No provider selected")
        assert error.message == "Configuration error: No provider selected"
        assert error.reason == "No provider selected"

    def test_storage_error_status(self):
        """StorageError should expose the backend status."""
        error = StorageError("decrypt_failed")
        assert error.status == "decrypt_failed"
        assert error.details == {"status": "decrypt_failed"}

    def test_network_error_wraps_cause(self):
        """NetworkError should keep its cause."""
        cause = ConnectionError("refused")
        error = NetworkError(cause)
        assert error.cause is cause
        assert "refused" in error.message
