"""
Shared infrastructure for IdP Auth.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- exceptions: Base exception classes and the authentication error taxonomy
- models: Credentials, tokens and user records

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .exceptions import (
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
from .models import AuthTokens, Credentials, User

__all__ = [
    "Settings",
    "get_settings",
    "IdpAuthError",
    "AuthenticationError",
    "InvalidCredentialsError",
    "TokenExpiredError",
    "ServerError",
    "NetworkError",
    "ConfigurationError",
    "BiometricAuthenticationFailedError",
    "StorageError",
    "UnknownError",
    "AuthTokens",
    "Credentials",
    "User",
]
