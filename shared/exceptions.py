"""
Base exception classes for IdP Auth.

Each module should define its own exceptions that inherit from these bases.
The AuthenticationError subclasses form the closed error taxonomy that the
session controller surfaces in its Error state; their ``code`` is the
category used for state comparison.
"""

from typing import Optional, Any


class IdpAuthError(Exception):
    """
    Base exception for all IdP Auth errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for presentation."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class AuthenticationError(IdpAuthError):
    """Base for every error the authentication state machine can land in."""

    pass


class InvalidCredentialsError(AuthenticationError):
    """Raised when the provider rejects the username/password pair."""

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class TokenExpiredError(AuthenticationError):
    """Raised when the access or refresh token is no longer accepted."""

    def __init__(self, message: str = "Your session has expired. Please log in again."):
        super().__init__(message, code="TOKEN_EXPIRED")


class ServerError(AuthenticationError):
    """Raised when the provider answers with a non-401 HTTP error."""

    def __init__(self, status: int, body: Optional[str] = None):
        super().__init__(
            f"Server error ({status}): {body or 'Unknown error'}",
            code="SERVER_ERROR",
            details={"status": status, "body": body},
        )
        self.status = status
        self.body = body


class NetworkError(AuthenticationError):
    """Raised when the request never produced an HTTP response."""

    def __init__(self, cause: Exception):
        super().__init__(
            f"Network error: {cause}",
            code="NETWORK_ERROR",
            details={"cause": type(cause).__name__},
        )
        self.cause = cause


class ConfigurationError(AuthenticationError):
    """Raised when provider configuration is missing or invalid."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(
            f"Configuration error: {message}",
            code="CONFIGURATION_ERROR",
            details=details,
        )
        self.reason = message


class BiometricAuthenticationFailedError(AuthenticationError):
    """Raised when biometric verification did not succeed."""

    def __init__(self, message: str = "Biometric authentication failed"):
        super().__init__(message, code="BIOMETRIC_AUTHENTICATION_FAILED")


class StorageError(AuthenticationError):
    """Raised when secure storage fails for a reason other than a missing key."""

    def __init__(self, status: str, message: Optional[str] = None):
        super().__init__(
            message or f"Secure storage error: {status}",
            code="STORAGE_ERROR",
            details={"status": status},
        )
        self.status = status


class UnknownError(AuthenticationError):
    """Wraps anything that does not fit another category."""

    def __init__(self, cause: Exception):
        super().__init__(
            f"Unknown error: {cause}",
            code="UNKNOWN_ERROR",
            details={"cause": type(cause).__name__},
        )
        self.cause = cause
