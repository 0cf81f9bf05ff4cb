"""
Biometrics module exceptions.

These are sensor-level outcomes. The session controller collapses them:
a cancellation returns to Unauthenticated silently, everything else
becomes BiometricAuthenticationFailedError.
"""

from shared.exceptions import IdpAuthError


class BiometricError(IdpAuthError):
    """Base exception for biometric verification errors."""

    pass


class BiometricNotAvailableError(BiometricError):
    """Raised when no usable sensor is present or nothing is enrolled."""

    def __init__(self, message: str = "Biometric authentication is not available"):
        super().__init__(message, code="BIOMETRIC_NOT_AVAILABLE")


class BiometricUserCancelledError(BiometricError):
    """Raised when the user dismissed the prompt or chose a fallback."""

    def __init__(self, message: str = "Biometric authentication was cancelled"):
        super().__init__(message, code="BIOMETRIC_USER_CANCELLED")


class BiometricLockoutError(BiometricError):
    """Raised when the sensor is locked after too many failed attempts."""

    def __init__(
        self,
        message: str = "Biometric authentication is locked out. Please try again later.",
    ):
        super().__init__(message, code="BIOMETRIC_LOCKOUT")


class BiometricFailedError(BiometricError):
    """Raised for any other verification failure."""

    def __init__(self, message: str = "Biometric authentication failed"):
        super().__init__(message, code="BIOMETRIC_FAILED")
