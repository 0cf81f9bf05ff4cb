"""
OAuth wire models.

Field names match the JSON the provider sends, so responses validate
directly into these models.
"""

from typing import Optional
from pydantic import BaseModel, Field


PASSWORD_GRANT = "password"
REFRESH_TOKEN_GRANT = "refresh_token"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
JSON_CONTENT_TYPE = "application/json"

PLACEHOLDER_USERNAME = "user"


class TokenResponse(BaseModel):
    """Token endpoint response for both password and refresh grants."""

    access_token: str
    token_type: str
    expires_in: float = Field(..., ge=0)
    refresh_token: Optional[str] = None
    scope: Optional[str] = None
    id_token: Optional[str] = None

    model_config = {"extra": "ignore"}


class UserInfoResponse(BaseModel):
    """OpenID Connect userinfo response (the claims we use)."""

    sub: str
    preferred_username: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None

    model_config = {"extra": "ignore"}
