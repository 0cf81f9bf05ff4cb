"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timedelta, timezone
from typing import Optional
from unittest.mock import AsyncMock

from shared.config import Settings, get_settings
from shared.models import AuthTokens, User
from providers.catalog import ProviderCatalog
from providers.sources import StaticProviderSource
from modules.biometrics.models import BiometricKind
from modules.biometrics.service import BiometricGate
from modules.secure_store.backends import InMemorySecretBackend
from modules.secure_store.service import SecureStore
from modules.session.service import reset_session_controller


T0 = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FakeClock:
    """Settable clock; call it to read the current time."""

    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


class ManualTask:
    """Handle returned by ManualScheduler."""

    def __init__(self, scheduler: "ManualScheduler", delay: float, callback):
        self._scheduler = scheduler
        self.delay = delay
        self.callback = callback
        self.due = scheduler.elapsed + delay
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        if not self.fired:
            self.cancelled = True


class ManualScheduler:
    """
    Scheduler driven by the test instead of the event loop.

    advance() moves virtual time forward, fires every due task in order and
    awaits each callback, so assertions can follow directly.
    """

    def __init__(self, clock: Optional[FakeClock] = None):
        self.clock = clock
        self.elapsed = 0.0
        self.tasks: list[ManualTask] = []

    def schedule(self, delay: float, callback) -> ManualTask:
        task = ManualTask(self, delay, callback)
        self.tasks.append(task)
        return task

    @property
    def pending(self) -> list[ManualTask]:
        return [t for t in self.tasks if not t.cancelled and not t.fired]

    async def advance(self, seconds: float) -> None:
        target = self.elapsed + seconds
        while True:
            due = [t for t in self.pending if t.due <= target]
            if not due:
                break
            task = min(due, key=lambda t: t.due)
            self._move_to(task.due)
            task.fired = True
            await task.callback()
        self._move_to(target)

    def _move_to(self, elapsed: float) -> None:
        if self.clock is not None and elapsed > self.elapsed:
            self.clock.advance(elapsed - self.elapsed)
        self.elapsed = max(self.elapsed, elapsed)


class FakeSensor:
    """Biometric sensor with a scripted outcome."""

    def __init__(self, available: bool = True, kind: BiometricKind = BiometricKind.FACE):
        self.available = available
        self.sensor_kind = kind
        self.result: bool = True
        self.error: Optional[Exception] = None
        self.calls = 0

    def is_available(self) -> bool:
        return self.available

    def kind(self) -> BiometricKind:
        return self.sensor_kind

    async def evaluate(self, reason: str) -> bool:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the controller singleton and cached settings around each test."""
    reset_session_controller()
    get_settings.cache_clear()
    yield
    reset_session_controller()
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with the default session policy."""
    return Settings(_env_file=None)


@pytest.fixture
def provider_entries() -> list[dict]:
    """Two valid provider entries, the second flagged as default."""
    return [
        {
            "id": "keycloak",
            "name": "Keycloak",
            "displayName": "Company SSO",
            "authorizationEndpoint": "https://sso.example.com/auth",
            "tokenEndpoint": "https://sso.example.com/token",
            "userInfoEndpoint": "https://sso.example.com/userinfo",
            "clientId": "mobile-app",
            "scope": "openid profile email",
        },
        {
            "id": "okta",
            "name": "Okta",
            "displayName": "Okta",
            "authorizationEndpoint": "https://okta.example.com/authorize",
            "tokenEndpoint": "https://okta.example.com/token",
            "clientId": "okta-client",
            "scope": "openid",
            "isDefault": True,
        },
    ]


@pytest.fixture
def catalog(provider_entries) -> ProviderCatalog:
    return ProviderCatalog(StaticProviderSource(provider_entries))


@pytest.fixture
def backend() -> InMemorySecretBackend:
    return InMemorySecretBackend()


@pytest.fixture
def store(backend) -> SecureStore:
    """Auth namespace store."""
    return SecureStore(backend, "idp-auth")


@pytest.fixture
def preferences(backend) -> SecureStore:
    """Preferences namespace store on the same backend."""
    return SecureStore(backend, "idp-auth.preferences")


@pytest.fixture
def sensor() -> FakeSensor:
    return FakeSensor()


@pytest.fixture
def biometrics(sensor, preferences) -> BiometricGate:
    return BiometricGate(sensor, preferences)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def scheduler(clock) -> ManualScheduler:
    return ManualScheduler(clock)


@pytest.fixture
def user() -> User:
    return User(
        id="user-123",
        username="alice",
        email="alice@example.com",
        display_name="Alice",
        provider="keycloak",
    )


@pytest.fixture
def make_tokens(clock):
    """Build AuthTokens issued at the fake clock's current time."""

    def _make(
        access_token: str = "access-1",
        refresh_token: Optional[str] = "refresh-1",
        expires_in: float = 3600,
        issued_at: Optional[datetime] = None,
    ) -> AuthTokens:
        return AuthTokens(
            access_token=access_token,
            refresh_token=refresh_token,
            expires_in=expires_in,
            issued_at=issued_at or clock(),
        )

    return _make


@pytest.fixture
def exchange(make_tokens, user) -> AsyncMock:
    """Token exchange double that succeeds by default."""
    mock = AsyncMock()
    mock.authenticate.return_value = make_tokens()
    mock.refresh.return_value = make_tokens(access_token="access-2", refresh_token="refresh-2")
    mock.get_user_info.return_value = user
    return mock
