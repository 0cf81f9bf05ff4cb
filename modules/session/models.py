"""
Session module data models.

AuthenticationState is the single value the presentation layer observes.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from shared.exceptions import AuthenticationError
from shared.models import User


class AuthenticationStatus(str, Enum):
    """Which case of the authentication state is live."""

    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    BIOMETRIC_PROMPT = "biometric_prompt"
    ERROR = "error"


@dataclass(frozen=True, eq=False)
class AuthenticationState:
    """
    Current authentication state.

    ``user`` is set only for AUTHENTICATED and ``error`` only for ERROR.
    Two authenticated states are equal when their users have the same id,
    and two error states are equal when their errors share a category
    (``code``), whatever the formatted message says.
    """

    status: AuthenticationStatus
    user: Optional[User] = None
    error: Optional[AuthenticationError] = None

    @classmethod
    def unauthenticated(cls) -> "AuthenticationState":
        return cls(AuthenticationStatus.UNAUTHENTICATED)

    @classmethod
    def authenticating(cls) -> "AuthenticationState":
        return cls(AuthenticationStatus.AUTHENTICATING)

    @classmethod
    def authenticated(cls, user: User) -> "AuthenticationState":
        return cls(AuthenticationStatus.AUTHENTICATED, user=user)

    @classmethod
    def biometric_prompt(cls) -> "AuthenticationState":
        return cls(AuthenticationStatus.BIOMETRIC_PROMPT)

    @classmethod
    def failed(cls, error: AuthenticationError) -> "AuthenticationState":
        return cls(AuthenticationStatus.ERROR, error=error)

    @property
    def is_authenticated(self) -> bool:
        return self.status == AuthenticationStatus.AUTHENTICATED

    def _identity(self) -> tuple:
        if self.status == AuthenticationStatus.AUTHENTICATED:
            return (self.status, self.user.id if self.user else None)
        if self.status == AuthenticationStatus.ERROR:
            return (self.status, self.error.code if self.error else None)
        return (self.status,)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AuthenticationState):
            return NotImplemented
        return self._identity() == other._identity()

    def __hash__(self) -> int:
        return hash(self._identity())

    def __repr__(self) -> str:
        if self.status == AuthenticationStatus.AUTHENTICATED and self.user:
            return f"AuthenticationState.authenticated(user_id={self.user.id!r})"
        if self.status == AuthenticationStatus.ERROR and self.error:
            return f"AuthenticationState.failed({self.error.code})"
        return f"AuthenticationState.{self.status.value}"
