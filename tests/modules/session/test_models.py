"""
Tests for the authentication state value.
"""

from shared.exceptions import InvalidCredentialsError, ServerError, TokenExpiredError
from shared.models import User
from modules.session.models import AuthenticationState, AuthenticationStatus


def make_user(user_id: str, username: str = "alice") -> User:
    return User(id=user_id, username=username, provider="keycloak")


class TestAuthenticationState:
    def test_authenticated_compares_by_user_id(self):
        """Users with the same id but different profiles are equal states."""
        first = AuthenticationState.authenticated(make_user("u1", "alice"))
        second = AuthenticationState.authenticated(make_user("u1", "alice.renamed"))
        assert first == second
        assert hash(first) == hash(second)

    def test_authenticated_different_users(self):
        """Different user ids are different states."""
        assert AuthenticationState.authenticated(make_user("u1")) != AuthenticationState.authenticated(
            make_user("u2")
        )

    def test_error_compares_by_category(self):
        """Errors of one category are equal whatever their message."""
        assert AuthenticationState.failed(ServerError(500, "a")) == AuthenticationState.failed(
            ServerError(502, "b")
        )

    def test_error_categories_differ(self):
        """Different categories are different states."""
        assert AuthenticationState.failed(TokenExpiredError()) != AuthenticationState.failed(
            InvalidCredentialsError()
        )

    def test_simple_states(self):
        """Payload-free states compare by status."""
        assert AuthenticationState.unauthenticated() == AuthenticationState.unauthenticated()
        assert AuthenticationState.authenticating() != AuthenticationState.biometric_prompt()

    def test_is_authenticated(self):
        assert AuthenticationState.authenticated(make_user("u1")).is_authenticated is True
        assert AuthenticationState.unauthenticated().is_authenticated is False

    def test_repr(self):
        """repr should name the case and payload key."""
        assert repr(AuthenticationState.authenticated(make_user("u1"))) == (
            "AuthenticationState.authenticated(user_id='u1')"
        )
        assert repr(AuthenticationState.failed(TokenExpiredError())) == (
            "AuthenticationState.failed(TOKEN_EXPIRED)"
        )
        assert repr(AuthenticationState.unauthenticated()) == "AuthenticationState.unauthenticated"

    def test_status_values(self):
        assert AuthenticationStatus.BIOMETRIC_PROMPT.value == "biometric_prompt"
