"""
Token exchange service implementation.

Password grant, refresh grant and userinfo against a provider's endpoints.
Every failure leaves this module as an AuthenticationError subclass.
"""

import logging
import uuid
from typing import Callable, Optional

from shared.exceptions import (
    AuthenticationError,
    InvalidCredentialsError,
    NetworkError,
    ServerError,
    TokenExpiredError,
    UnknownError,
)
from shared.models import AuthTokens, Credentials, User, utcnow
from providers.base import IdentityProvider

from .interfaces import ITokenExchange, ITransport
from .models import (
    FORM_CONTENT_TYPE,
    JSON_CONTENT_TYPE,
    PASSWORD_GRANT,
    PLACEHOLDER_USERNAME,
    REFRESH_TOKEN_GRANT,
    TokenResponse,
    UserInfoResponse,
)
from .exceptions import HTTPStatusError, TransportError

logger = logging.getLogger(__name__)

_FORM_HEADERS = {"Content-Type": FORM_CONTENT_TYPE, "Accept": JSON_CONTENT_TYPE}


def _map_error(error: Exception, on_unauthorized: Callable[[], AuthenticationError]) -> AuthenticationError:
    """Translate a transport or decoding failure into the error taxonomy."""
    if isinstance(error, AuthenticationError):
        return error
    if isinstance(error, HTTPStatusError):
        if error.status == 401:
            return on_unauthorized()
        return ServerError(error.status, error.body_text)
    if isinstance(error, TransportError):
        return NetworkError(error)
    return UnknownError(error)


class TokenExchangeService(ITokenExchange):
    """
    Stateless OAuth operations over a transport.

    No retries: a failed request is reported, and deciding whether to try
    again is up to the caller.
    """

    def __init__(self, transport: ITransport):
        self._transport = transport

    async def authenticate(
        self, credentials: Credentials, provider: IdentityProvider
    ) -> AuthTokens:
        form = {
            "grant_type": PASSWORD_GRANT,
            "username": credentials.username,
            "password": credentials.password.get_secret_value(),
            "client_id": provider.client_id,
        }
        if provider.scope:
            form["scope"] = provider.scope

        try:
            body = await self._transport.send(
                "POST", provider.token_endpoint, headers=_FORM_HEADERS, form=form
            )
            response = TokenResponse.model_validate_json(body)
        except Exception as e:
            raise _map_error(e, InvalidCredentialsError) from e

        logger.debug(f"Password grant succeeded for provider {provider.id}")
        return self._to_tokens(response, fallback_refresh_token=None)

    async def refresh(self, refresh_token: str, provider: IdentityProvider) -> AuthTokens:
        form = {
            "grant_type": REFRESH_TOKEN_GRANT,
            "refresh_token": refresh_token,
            "client_id": provider.client_id,
        }

        try:
            body = await self._transport.send(
                "POST", provider.token_endpoint, headers=_FORM_HEADERS, form=form
            )
            response = TokenResponse.model_validate_json(body)
        except Exception as e:
            raise _map_error(e, TokenExpiredError) from e

        if response.refresh_token is None:
            logger.debug("Refresh response did not rotate the refresh token")
        return self._to_tokens(response, fallback_refresh_token=refresh_token)

    async def get_user_info(self, access_token: str, provider: IdentityProvider) -> User:
        if not provider.user_info_endpoint:
            # No userinfo endpoint: synthesize a minimal user
            return User(
                id=str(uuid.uuid4()),
                username=PLACEHOLDER_USERNAME,
                provider=provider.id,
            )

        headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": JSON_CONTENT_TYPE,
        }
        try:
            body = await self._transport.send("GET", provider.user_info_endpoint, headers=headers)
            info = UserInfoResponse.model_validate_json(body)
        except Exception as e:
            raise _map_error(e, TokenExpiredError) from e

        return User(
            id=info.sub,
            username=info.preferred_username or info.sub,
            email=info.email,
            display_name=info.name,
            provider=provider.id,
        )

    @staticmethod
    def _to_tokens(response: TokenResponse, fallback_refresh_token: Optional[str]) -> AuthTokens:
        return AuthTokens(
            access_token=response.access_token,
            refresh_token=response.refresh_token or fallback_refresh_token,
            token_type=response.token_type,
            expires_in=response.expires_in,
            scope=response.scope,
            id_token=response.id_token,
            issued_at=utcnow(),
        )
