"""
Biometrics module.

Biometric re-authentication over a platform sensor, with a persisted
enable preference and a one-time "offer setup" latch.

Public API:
- IBiometricGate / IBiometricSensor: Interfaces
- BiometricGate, NoBiometricSensor: Implementations
- BiometricKind: Sensor kind
- Biometric exceptions: BiometricUserCancelledError, etc.
"""

from .interfaces import IBiometricGate, IBiometricSensor
from .models import BiometricKind
from .service import BiometricGate, NoBiometricSensor
from .exceptions import (
    BiometricError,
    BiometricNotAvailableError,
    BiometricUserCancelledError,
    BiometricLockoutError,
    BiometricFailedError,
)

__all__ = [
    # Interfaces
    "IBiometricGate",
    "IBiometricSensor",
    # Models
    "BiometricKind",
    # Implementations
    "BiometricGate",
    "NoBiometricSensor",
    # Exceptions
    "BiometricError",
    "BiometricNotAvailableError",
    "BiometricUserCancelledError",
    "BiometricLockoutError",
    "BiometricFailedError",
]
