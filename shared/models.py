"""
Shared data models used across modules.

Credentials, tokens and the user record travel between the token exchange,
the secure store and the session controller, so they live here rather than
in any single module.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from pydantic import BaseModel, Field, SecretStr


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Credentials(BaseModel):
    """
    Username/password pair for a single password-grant attempt.

    Never persisted. The password is a SecretStr so it cannot leak
    through reprs or log lines.
    """

    username: str
    password: SecretStr

    model_config = {"frozen": True}


class AuthTokens(BaseModel):
    """
    Token set issued by a provider.

    Replaced wholesale on every successful exchange or refresh, never
    updated field by field.
    """

    access_token: str = Field(..., description="Bearer access token")
    refresh_token: Optional[str] = Field(None, description="Refresh token, if issued")
    token_type: str = Field(default="Bearer", description="Token type")
    expires_in: float = Field(..., ge=0, description="Lifetime in seconds")
    scope: Optional[str] = Field(None, description="Granted scope")
    id_token: Optional[str] = Field(None, description="OpenID Connect ID token")
    issued_at: datetime = Field(default_factory=utcnow, description="Issue time (UTC)")

    model_config = {"frozen": True}

    @property
    def expiration_date(self) -> datetime:
        return self.issued_at + timedelta(seconds=self.expires_in)

    def time_to_expiry(self, now: Optional[datetime] = None) -> float:
        """Seconds until expiry; negative once expired."""
        now = now or utcnow()
        return (self.expiration_date - now).total_seconds()

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or utcnow()
        return (now - self.issued_at).total_seconds() >= self.expires_in


class User(BaseModel):
    """
    Authenticated user profile.

    Identity is ``id``; the session state compares users by id only.
    """

    id: str = Field(..., description="Subject identifier")
    username: str = Field(..., description="Login name")
    email: Optional[str] = Field(None, description="Email address")
    display_name: Optional[str] = Field(None, description="Display name")
    provider: str = Field(..., description="Identity provider id")

    model_config = {"frozen": True}
