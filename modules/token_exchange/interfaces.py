"""
Token exchange module interfaces.

The session controller depends on ITokenExchange. ITransport is the minimal
HTTP capability the exchange needs; tests substitute either one.
"""

from typing import Optional, Protocol, runtime_checkable

from shared.models import AuthTokens, Credentials, User
from providers.base import IdentityProvider


@runtime_checkable
class ITransport(Protocol):
    """Interface for sending one HTTP request."""

    async def send(
        self,
        method: str,
        url: str,
        headers: Optional[dict[str, str]] = None,
        form: Optional[dict[str, str]] = None,
    ) -> bytes:
        """
        Send a request and return the body of a 2xx response.

        Args:
            method: HTTP method
            url: Absolute https URL
            headers: Request headers
            form: Fields to send form-urlencoded in the body

        Returns:
            Response body bytes

        Raises:
            HTTPStatusError: If the status is not 2xx
            TransportError: If no response was received
        """
        ...


@runtime_checkable
class ITokenExchange(Protocol):
    """
    Interface for stateless OAuth operations.

    Each call is a single request/response cycle with no retries.
    """

    async def authenticate(
        self, credentials: Credentials, provider: IdentityProvider
    ) -> AuthTokens:
        """
        Exchange a username/password for tokens (password grant).

        Raises:
            InvalidCredentialsError: On HTTP 401
            ServerError: On any other HTTP error
            NetworkError: On transport failure
            UnknownError: For anything else
        """
        ...

    async def refresh(self, refresh_token: str, provider: IdentityProvider) -> AuthTokens:
        """
        Exchange a refresh token for new tokens (refresh grant).

        The prior refresh token is kept when the response omits a new one.

        Raises:
            TokenExpiredError: On HTTP 401
            ServerError, NetworkError, UnknownError: As for authenticate
        """
        ...

    async def get_user_info(self, access_token: str, provider: IdentityProvider) -> User:
        """
        Fetch the user profile for an access token.

        Providers without a userinfo endpoint get a synthesized user.

        Raises:
            TokenExpiredError: On HTTP 401
            ServerError, NetworkError, UnknownError: As for authenticate
        """
        ...
