"""
Biometrics module interfaces.

IBiometricSensor is the platform capability (out of process, supplied by
the host). IBiometricGate is what the session controller depends on.
"""

from typing import Protocol, runtime_checkable

from .models import BiometricKind


@runtime_checkable
class IBiometricSensor(Protocol):
    """Interface for a platform biometric sensor."""

    def is_available(self) -> bool:
        """Whether a sensor is present and enrolled."""
        ...

    def kind(self) -> BiometricKind:
        """The sensor kind, BiometricKind.NONE if there is none."""
        ...

    async def evaluate(self, reason: str) -> bool:
        """
        Run one present/verify cycle.

        Returns:
            True if the user was verified, False otherwise

        Raises:
            BiometricError: For cancellation, lockout, unavailability or failure
        """
        ...


@runtime_checkable
class IBiometricGate(Protocol):
    """
    Interface for biometric re-authentication and its preferences.
    """

    def is_available(self) -> bool:
        """Whether biometric verification can be attempted at all."""
        ...

    def kind(self) -> BiometricKind:
        """Sensor kind; NONE when unavailable."""
        ...

    async def verify(self) -> bool:
        """
        Perform a single verification.

        Raises:
            BiometricNotAvailableError: If the sensor is unavailable
            BiometricUserCancelledError: If the user cancelled
            BiometricLockoutError: If the sensor is locked out
            BiometricFailedError: For any other failure
        """
        ...

    async def is_enabled(self) -> bool:
        """The persisted opt-in preference."""
        ...

    async def set_enabled(self, enabled: bool) -> None:
        """Persist the opt-in preference."""
        ...

    async def should_offer_setup(self) -> bool:
        """True iff available, not enabled and not already offered."""
        ...

    async def mark_setup_offered(self) -> None:
        """Latch the setup offer so it is not shown again."""
        ...
