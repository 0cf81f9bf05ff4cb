"""
Token exchange module.

Stateless OAuth2 operations: password grant, refresh grant, userinfo.

Public API:
- ITokenExchange / ITransport: Interfaces
- TokenExchangeService: Implementation
- HttpxTransport: httpx-based transport
- Wire models: TokenResponse, UserInfoResponse
- Transport exceptions: TransportError, HTTPStatusError, etc.
"""

from .interfaces import ITokenExchange, ITransport
from .models import TokenResponse, UserInfoResponse
from .service import TokenExchangeService
from .transport import HttpxTransport
from .exceptions import (
    TransportError,
    HTTPStatusError,
    TransportTimeoutError,
    NoConnectionError,
    InsecureTransportError,
)

__all__ = [
    # Interfaces
    "ITokenExchange",
    "ITransport",
    # Models
    "TokenResponse",
    "UserInfoResponse",
    # Implementations
    "TokenExchangeService",
    "HttpxTransport",
    # Exceptions
    "TransportError",
    "HTTPStatusError",
    "TransportTimeoutError",
    "NoConnectionError",
    "InsecureTransportError",
]
