"""
Biometrics module data models.
"""

from enum import Enum


class BiometricKind(str, Enum):
    """Kind of biometric sensor present on the device."""

    NONE = "none"
    FINGERPRINT = "fingerprint"
    FACE = "face"
    IRIS = "iris"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    BiometricKind.NONE: "None",
    BiometricKind.FINGERPRINT: "Touch ID",
    BiometricKind.FACE: "Face ID",
    BiometricKind.IRIS: "Optic ID",
}


DEFAULT_BIOMETRIC_REASON = "Authenticate to access your account"
