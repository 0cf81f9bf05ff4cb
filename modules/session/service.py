"""
Session controller implementation.

The authentication state machine. It owns the current state, the selected
provider, the token-refresh timer and the inactivity timer, and it is the
only component that writes tokens or the user record to secure storage.

Every command that touches the network or storage runs under one lock, so
two token exchanges can never race to persist conflicting tokens. Logout
additionally bumps a generation counter (epoch): a continuation that
resumes after a logout sees a stale epoch and drops its result instead of
resurrecting the session.
"""

import asyncio
import logging
from datetime import datetime
from functools import partial
from typing import Callable, Optional

from shared.config import Settings, get_settings
from shared.exceptions import (
    AuthenticationError,
    BiometricAuthenticationFailedError,
    ConfigurationError,
    StorageError,
    TokenExpiredError,
    UnknownError,
)
from shared.models import AuthTokens, Credentials, User, utcnow
from providers.base import IdentityProvider, IProviderCatalog
from providers.catalog import load_provider_catalog
from modules.biometrics.interfaces import IBiometricGate, IBiometricSensor
from modules.biometrics.models import BiometricKind
from modules.biometrics.service import BiometricGate, NoBiometricSensor
from modules.biometrics.exceptions import BiometricError, BiometricUserCancelledError
from modules.secure_store.interfaces import ISecureStore
from modules.secure_store.models import StorageKeys
from modules.secure_store.service import create_secret_backend, create_secure_store
from modules.secure_store.exceptions import CorruptRecordError
from modules.token_exchange.interfaces import ITokenExchange
from modules.token_exchange.service import TokenExchangeService
from modules.token_exchange.transport import HttpxTransport

from .interfaces import ISessionController, StateObserver
from .models import AuthenticationState
from .scheduler import AsyncioScheduler, IScheduledTask, IScheduler

logger = logging.getLogger(__name__)


def compute_refresh_delay(expires_in: float, lead: float = 300, floor: float = 60) -> float:
    """Seconds until the refresh timer should fire.

    Refresh ``lead`` seconds before expiry, but never sooner than ``floor``
    seconds so short-lived tokens do not cause a refresh storm.
    """
    return max(expires_in - lead, floor)


def _as_auth_error(error: Exception) -> AuthenticationError:
    if isinstance(error, AuthenticationError):
        return error
    return UnknownError(error)


class SessionController(ISessionController):
    """
    Authentication state machine.

    Collaborators are injected; see create_session_controller() for the
    production wiring.
    """

    def __init__(
        self,
        store: ISecureStore,
        biometrics: IBiometricGate,
        catalog: IProviderCatalog,
        exchange: ITokenExchange,
        scheduler: Optional[IScheduler] = None,
        settings: Optional[Settings] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        settings = settings or get_settings()
        self._store = store
        self._biometrics = biometrics
        self._catalog = catalog
        self._exchange = exchange
        self._scheduler = scheduler or AsyncioScheduler()
        self._clock = clock

        self._refresh_lead = settings.token_refresh_lead_seconds
        self._min_refresh_delay = settings.min_token_refresh_delay_seconds
        self._session_timeout = settings.session_timeout_seconds
        self._foreground_threshold = settings.foreground_refresh_threshold_seconds

        self._state = AuthenticationState.unauthenticated()
        self._observers: list[StateObserver] = []
        self._available_providers: list[IdentityProvider] = []
        self._selected_provider: Optional[IdentityProvider] = None

        self._tokens: Optional[AuthTokens] = None
        self._user: Optional[User] = None
        self._refresh_timer: Optional[IScheduledTask] = None
        self._timeout_timer: Optional[IScheduledTask] = None
        self._last_activity: Optional[datetime] = None

        self._lock = asyncio.Lock()
        self._epoch = 0

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def state(self) -> AuthenticationState:
        return self._state

    @property
    def selected_provider(self) -> Optional[IdentityProvider]:
        return self._selected_provider

    @property
    def available_providers(self) -> list[IdentityProvider]:
        return list(self._available_providers)

    @property
    def tokens(self) -> Optional[AuthTokens]:
        """Tokens of the live session, if any."""
        return self._tokens

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _is_current(self, epoch: int) -> bool:
        return epoch == self._epoch

    def _set_state(self, state: AuthenticationState, epoch: Optional[int] = None) -> bool:
        """Publish a new state unless the caller's epoch has been superseded."""
        if epoch is not None and not self._is_current(epoch):
            logger.debug(f"Discarding stale transition to {state!r}")
            return False

        logger.debug(f"Authentication state: {self._state!r} -> {state!r}")
        self._state = state
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception:
                logger.exception("Authentication state observer raised")
        return True

    def _fail(self, error: Exception, epoch: Optional[int] = None) -> None:
        auth_error = _as_auth_error(error)
        logger.warning(f"Authentication failed: {auth_error.code}: {auth_error.message}")
        self._set_state(AuthenticationState.failed(auth_error), epoch)

    # ------------------------------------------------------------------
    # Configuration and provider selection
    # ------------------------------------------------------------------

    async def load_configuration(self) -> None:
        async with self._lock:
            try:
                providers = self._catalog.load_providers()
            except Exception as e:
                self._fail(e)
                return
            self._available_providers = providers

            stored_id: Optional[str] = None
            try:
                stored_id = await self._store.retrieve(StorageKeys.SELECTED_PROVIDER)
            except StorageError as e:
                logger.warning(f"Could not read the selected provider: {e.message}")

            provider = next((p for p in providers if p.id == stored_id), None)
            if provider is None:
                try:
                    provider = self._catalog.get_default_provider()
                except Exception as e:
                    self._fail(e)
                    return
            self._selected_provider = provider
            logger.debug(f"Selected identity provider: {provider.id}")

    async def select_provider(self, provider_id: str) -> None:
        provider = self._catalog.get_provider(provider_id)
        async with self._lock:
            self._selected_provider = provider
            try:
                await self._store.store(StorageKeys.SELECTED_PROVIDER, provider.id)
            except StorageError as e:
                logger.warning(f"Failed to store selected provider: {e.message}")

    def _provider_for(self, user: Optional[User]) -> Optional[IdentityProvider]:
        if user is not None:
            try:
                return self._catalog.get_provider(user.provider)
            except ConfigurationError as e:
                logger.warning(f"Provider of the stored user is unavailable: {e.message}")
        return self._selected_provider

    # ------------------------------------------------------------------
    # Authentication flows
    # ------------------------------------------------------------------

    async def check_status(self) -> None:
        async with self._lock:
            epoch = self._epoch
            try:
                try:
                    tokens = await self._store.retrieve(StorageKeys.AUTH_TOKENS)
                except CorruptRecordError:
                    logger.warning("Stored tokens are corrupt; treating as signed out")
                    tokens = None

                if tokens is None:
                    self._set_state(AuthenticationState.unauthenticated(), epoch)
                    return

                use_biometrics = (
                    self._biometrics.is_available()
                    and await self._biometrics.is_enabled()
                )
            except Exception as e:
                self._fail(e, epoch)
                return

            if use_biometrics:
                await self._authenticate_with_biometrics(epoch)
            else:
                await self._perform_check(epoch)

    async def authenticate(self, credentials: Credentials) -> None:
        async with self._lock:
            epoch = self._epoch
            provider = self._selected_provider
            if provider is None:
                self._fail(ConfigurationError("No provider selected"), epoch)
                return

            self._set_state(AuthenticationState.authenticating(), epoch)
            try:
                tokens = await self._exchange.authenticate(credentials, provider)
                if not self._is_current(epoch):
                    return
                user = await self._exchange.get_user_info(tokens.access_token, provider)
                if not self._is_current(epoch):
                    return

                await self._store.store(StorageKeys.AUTH_TOKENS, tokens)
                await self._store.store(StorageKeys.USER, user)
                await self._store.store(StorageKeys.SELECTED_PROVIDER, provider.id)
            except Exception as e:
                self._fail(e, epoch)
                return

            if self._apply_session(tokens, user, epoch):
                logger.info(f"User {user.id} authenticated with provider {provider.id}")

    async def authenticate_with_biometrics(self) -> None:
        async with self._lock:
            await self._authenticate_with_biometrics(self._epoch)

    async def _authenticate_with_biometrics(self, epoch: int) -> None:
        if not self._biometrics.is_available():
            self._fail(BiometricAuthenticationFailedError(), epoch)
            return

        self._set_state(AuthenticationState.biometric_prompt(), epoch)
        try:
            verified = await self._biometrics.verify()
        except BiometricUserCancelledError:
            # Cancelling is a choice, not a failure
            self._set_state(AuthenticationState.unauthenticated(), epoch)
            return
        except BiometricError as e:
            logger.warning(f"Biometric verification failed: {e.code}")
            self._fail(BiometricAuthenticationFailedError(), epoch)
            return
        except Exception as e:
            logger.warning(f"Biometric verification raised {type(e).__name__}: {e}")
            self._fail(BiometricAuthenticationFailedError(), epoch)
            return

        if not self._is_current(epoch):
            return
        if verified:
            await self._perform_check(epoch)
        else:
            self._fail(BiometricAuthenticationFailedError(), epoch)

    async def _perform_check(self, epoch: int) -> None:
        try:
            tokens = await self._store.retrieve(StorageKeys.AUTH_TOKENS)
            user = await self._store.retrieve(StorageKeys.USER)
        except CorruptRecordError:
            logger.warning("Stored session is corrupt; treating as signed out")
            tokens, user = None, None
        except Exception as e:
            self._fail(e, epoch)
            return

        if not self._is_current(epoch):
            return
        if tokens is None or user is None:
            self._set_state(AuthenticationState.unauthenticated(), epoch)
            return

        if tokens.is_expired(self._clock()):
            await self._refresh_tokens(tokens, user, epoch, record_activity=True)
        else:
            self._apply_session(tokens, user, epoch)

    async def _refresh_tokens(
        self,
        tokens: AuthTokens,
        user: Optional[User],
        epoch: int,
        record_activity: bool = False,
    ) -> None:
        provider = self._provider_for(user)
        if not tokens.refresh_token or provider is None:
            self._fail(TokenExpiredError(), epoch)
            return

        try:
            new_tokens = await self._exchange.refresh(tokens.refresh_token, provider)
            if not self._is_current(epoch):
                return
            await self._store.store(StorageKeys.AUTH_TOKENS, new_tokens)
            if user is None:
                user = await self._store.retrieve(StorageKeys.USER)
        except Exception as e:
            logger.warning(f"Token refresh failed: {type(e).__name__}")
            self._fail(TokenExpiredError(), epoch)
            return

        if not self._is_current(epoch):
            return
        if user is None:
            self._set_state(AuthenticationState.unauthenticated(), epoch)
            return
        if self._apply_session(new_tokens, user, epoch, record_activity=record_activity):
            logger.info(f"Refreshed tokens for user {user.id}")

    def _apply_session(
        self,
        tokens: AuthTokens,
        user: User,
        epoch: int,
        record_activity: bool = True,
    ) -> bool:
        """Enter Authenticated and arm both timers; False if the epoch is stale.

        Login and unlock count as user activity. A background refresh does
        not: it rearms the inactivity timer from the last recorded activity.
        """
        if not self._set_state(AuthenticationState.authenticated(user), epoch):
            return False
        self._tokens = tokens
        self._user = user
        self.schedule_refresh(tokens)
        if record_activity or self._last_activity is None:
            self.refresh_user_activity()
        else:
            elapsed = (self._clock() - self._last_activity).total_seconds()
            self._arm_session_timeout(max(self._session_timeout - elapsed, 0.0))
        return True

    async def logout(self) -> None:
        self._epoch += 1
        self._cancel_timers()
        self._tokens = None
        self._user = None
        self._last_activity = None
        self._set_state(AuthenticationState.unauthenticated())

        # Waits for any in-flight operation, which will see the new epoch
        # and drop its result, before wiping what it may have persisted.
        async with self._lock:
            try:
                await self._store.delete_all()
            except StorageError as e:
                logger.error(f"Failed to clear secure storage during logout: {e.message}")
        logger.info("User logged out")

    # ------------------------------------------------------------------
    # Timers
    # ------------------------------------------------------------------

    def schedule_refresh(self, tokens: AuthTokens) -> IScheduledTask:
        """Arm the refresh timer, replacing any pending one."""
        if self._refresh_timer is not None:
            self._refresh_timer.cancel()
        delay = compute_refresh_delay(tokens.expires_in, self._refresh_lead, self._min_refresh_delay)
        self._refresh_timer = self._scheduler.schedule(
            delay, partial(self._on_refresh_timer, self._epoch)
        )
        logger.debug(f"Token refresh scheduled in {delay:.0f}s")
        return self._refresh_timer

    async def _on_refresh_timer(self, epoch: int) -> None:
        async with self._lock:
            if not self._is_current(epoch) or not self._state.is_authenticated:
                return
            if self._tokens is None:
                return
            await self._refresh_tokens(self._tokens, self._user, epoch)

    def refresh_user_activity(self) -> None:
        self._last_activity = self._clock()
        if self._state.is_authenticated:
            self._arm_session_timeout(self._session_timeout)

    def _arm_session_timeout(self, delay: float) -> None:
        if self._timeout_timer is not None:
            self._timeout_timer.cancel()
        self._timeout_timer = self._scheduler.schedule(
            delay, partial(self._on_session_timeout, self._epoch)
        )

    async def _on_session_timeout(self, epoch: int) -> None:
        if not self._is_current(epoch) or not self._state.is_authenticated:
            return
        if self._last_activity is None:
            return

        elapsed = (self._clock() - self._last_activity).total_seconds()
        if elapsed >= self._session_timeout:
            logger.info(f"Session timed out after {elapsed:.0f}s of inactivity")
            await self.logout()
        else:
            # Timer fired early relative to the latest activity
            self._arm_session_timeout(self._session_timeout - elapsed)

    def _cancel_timers(self) -> None:
        if self._refresh_timer is not None:
            self._refresh_timer.cancel()
            self._refresh_timer = None
        if self._timeout_timer is not None:
            self._timeout_timer.cancel()
            self._timeout_timer = None

    async def handle_foreground_resume(self) -> None:
        if not self._state.is_authenticated or self._tokens is None:
            return
        if self._tokens.time_to_expiry(self._clock()) >= self._foreground_threshold:
            return

        async with self._lock:
            epoch = self._epoch
            if not self._state.is_authenticated or self._tokens is None:
                return
            logger.debug("Tokens expire soon after resume; refreshing")
            await self._refresh_tokens(self._tokens, self._user, epoch)

    async def aclose(self) -> None:
        """Cancel both timers."""
        self._cancel_timers()

    # ------------------------------------------------------------------
    # Biometric preferences
    # ------------------------------------------------------------------

    async def enable_biometric_authentication(self) -> None:
        await self._biometrics.set_enabled(True)

    async def disable_biometric_authentication(self) -> None:
        await self._biometrics.set_enabled(False)

    async def is_biometric_authentication_enabled(self) -> bool:
        return await self._biometrics.is_enabled()

    async def should_prompt_for_biometric_setup(self) -> bool:
        return await self._biometrics.should_offer_setup()

    async def set_biometric_setup_prompted(self) -> None:
        await self._biometrics.mark_setup_offered()

    def biometric_kind(self) -> BiometricKind:
        return self._biometrics.kind()


def create_session_controller(
    settings: Optional[Settings] = None,
    sensor: Optional[IBiometricSensor] = None,
) -> SessionController:
    """Wire a SessionController from settings.

    Args:
        settings: Settings to use; defaults to get_settings()
        sensor: Platform biometric sensor; defaults to NoBiometricSensor

    Returns:
        A controller whose configuration has not been loaded yet
    """
    settings = settings or get_settings()
    backend = create_secret_backend(settings)
    store = create_secure_store(backend, settings.keychain_service)
    preferences = create_secure_store(backend, settings.preferences_service)

    return SessionController(
        store=store,
        biometrics=BiometricGate(sensor or NoBiometricSensor(), preferences),
        catalog=load_provider_catalog(settings.providers_config_path),
        exchange=TokenExchangeService(HttpxTransport(timeout=settings.http_timeout)),
        scheduler=AsyncioScheduler(),
        settings=settings,
    )


# Module-level instance getter
_controller_instance: Optional[SessionController] = None


def get_session_controller() -> SessionController:
    """Get the session controller singleton."""
    global _controller_instance
    if _controller_instance is None:
        _controller_instance = create_session_controller()
    return _controller_instance


def reset_session_controller() -> None:
    """Reset the session controller singleton (for testing)."""
    global _controller_instance
    _controller_instance = None
