"""
Biometric gate implementation.

Wraps a platform sensor and keeps the user's biometric preferences in a
secure store on its own namespace, so logging out (which wipes the auth
namespace) does not reset them.
"""

import logging

from modules.secure_store.interfaces import ISecureStore
from modules.secure_store.models import PreferenceKeys

from .interfaces import IBiometricGate, IBiometricSensor
from .models import BiometricKind, DEFAULT_BIOMETRIC_REASON
from .exceptions import (
    BiometricError,
    BiometricFailedError,
    BiometricNotAvailableError,
)

logger = logging.getLogger(__name__)


class NoBiometricSensor(IBiometricSensor):
    """Sensor for hosts without biometric hardware."""

    def is_available(self) -> bool:
        return False

    def kind(self) -> BiometricKind:
        return BiometricKind.NONE

    async def evaluate(self, reason: str) -> bool:
        raise BiometricNotAvailableError()


class BiometricGate(IBiometricGate):
    """
    Biometric verification plus the enable preference and setup-offer latch.
    """

    def __init__(
        self,
        sensor: IBiometricSensor,
        preferences: ISecureStore,
        reason: str = DEFAULT_BIOMETRIC_REASON,
    ):
        self._sensor = sensor
        self._preferences = preferences
        self._reason = reason

    def is_available(self) -> bool:
        return self._sensor.is_available()

    def kind(self) -> BiometricKind:
        if not self.is_available():
            return BiometricKind.NONE
        return self._sensor.kind()

    async def verify(self) -> bool:
        if not self.is_available():
            raise BiometricNotAvailableError()
        if not await self.is_enabled():
            raise BiometricFailedError("Biometric authentication is not enabled")

        try:
            return await self._sensor.evaluate(self._reason)
        except BiometricError:
            raise
        except Exception as e:
            logger.warning(f"Biometric sensor raised {type(e).__name__}: {e}")
            raise BiometricFailedError()

    async def is_enabled(self) -> bool:
        return bool(await self._preferences.retrieve(PreferenceKeys.BIOMETRIC_AUTH_ENABLED))

    async def set_enabled(self, enabled: bool) -> None:
        await self._preferences.store(PreferenceKeys.BIOMETRIC_AUTH_ENABLED, enabled)
        logger.info(f"Biometric authentication {'enabled' if enabled else 'disabled'}")

    async def should_offer_setup(self) -> bool:
        if not self.is_available() or await self.is_enabled():
            return False
        offered = await self._preferences.retrieve(PreferenceKeys.BIOMETRIC_SETUP_PROMPTED)
        return not offered

    async def mark_setup_offered(self) -> None:
        await self._preferences.store(PreferenceKeys.BIOMETRIC_SETUP_PROMPTED, True)
