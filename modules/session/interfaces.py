"""
Session module interface.

This is the surface the presentation layer drives: it observes the
authentication state and issues commands.
"""

from typing import Callable, Optional, Protocol, runtime_checkable

from shared.models import Credentials
from providers.base import IdentityProvider
from modules.biometrics.models import BiometricKind

from .models import AuthenticationState

StateObserver = Callable[[AuthenticationState], None]


@runtime_checkable
class ISessionController(Protocol):
    """
    Interface for the authentication session controller.

    All commands are serialized: concurrent calls run one after another,
    never interleaved.
    """

    @property
    def state(self) -> AuthenticationState:
        """The current authentication state."""
        ...

    @property
    def selected_provider(self) -> Optional[IdentityProvider]:
        ...

    @property
    def available_providers(self) -> list[IdentityProvider]:
        ...

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """
        Register an observer called synchronously on every state change.

        Returns:
            A callable that removes the observer
        """
        ...

    async def load_configuration(self) -> None:
        """Load providers and restore the previously selected one."""
        ...

    async def check_status(self) -> None:
        """Restore a stored session, via biometrics when enabled."""
        ...

    async def authenticate(self, credentials: Credentials) -> None:
        """Log in with a username and password against the selected provider."""
        ...

    async def authenticate_with_biometrics(self) -> None:
        """Unlock the stored session with a biometric check."""
        ...

    async def logout(self) -> None:
        """End the session, cancel timers and wipe stored credentials."""
        ...

    async def select_provider(self, provider_id: str) -> None:
        """
        Select and persist the identity provider.

        Raises:
            ProviderNotFoundError: If the id is not in the catalog
        """
        ...

    def refresh_user_activity(self) -> None:
        """Record user interaction and restart the inactivity timeout."""
        ...

    async def handle_foreground_resume(self) -> None:
        """Refresh tokens on resume if they expire soon."""
        ...

    async def enable_biometric_authentication(self) -> None:
        ...

    async def disable_biometric_authentication(self) -> None:
        ...

    async def is_biometric_authentication_enabled(self) -> bool:
        ...

    async def should_prompt_for_biometric_setup(self) -> bool:
        ...

    async def set_biometric_setup_prompted(self) -> None:
        ...

    def biometric_kind(self) -> BiometricKind:
        ...
