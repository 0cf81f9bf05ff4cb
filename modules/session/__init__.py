"""
Session module.

The authentication state machine: login, biometric unlock, token refresh
scheduling, inactivity timeout and logout.

Public API:
- ISessionController: Interface for the controller
- SessionController: Implementation
- AuthenticationState / AuthenticationStatus: Observable state
- IScheduler / AsyncioScheduler: Deferred-task abstraction for timers
- create_session_controller(): Wire a controller from settings
- get_session_controller(): Get the singleton controller
"""

from .interfaces import ISessionController, StateObserver
from .models import AuthenticationState, AuthenticationStatus
from .scheduler import AsyncioScheduledTask, AsyncioScheduler, IScheduledTask, IScheduler
from .service import (
    SessionController,
    compute_refresh_delay,
    create_session_controller,
    get_session_controller,
    reset_session_controller,
)

__all__ = [
    # Interfaces
    "ISessionController",
    "StateObserver",
    "IScheduler",
    "IScheduledTask",
    # Models
    "AuthenticationState",
    "AuthenticationStatus",
    # Implementations
    "SessionController",
    "AsyncioScheduler",
    "AsyncioScheduledTask",
    "compute_refresh_delay",
    "create_session_controller",
    "get_session_controller",
    "reset_session_controller",
]
