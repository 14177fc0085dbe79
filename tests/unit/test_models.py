"""Unit tests for Pydantic models."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from blog_api.models.auth import AuthResponse, LoginRequest, RegisterRequest, TokenPair
from blog_api.models.user import AuthenticatedIdentity, User

VALID_REGISTRATION = {
    "username": "alice01",
    "name": "Alice",
    "email": "alice@example.com",
    "password": "Passw0rd",
}


def _user(**overrides):
    now = datetime.now(timezone.utc)
    fields = {
        "id": uuid4(),
        "username": "alice01",
        "name": "Alice",
        "email": "alice@example.com",
        "password_hash": "$2b$10$somehashvalue",
        "created_at": now,
        "updated_at": now,
    }
    fields.update(overrides)
    return User(**fields)


class TestRegisterRequest:
    """Tests for RegisterRequest validation."""

    def test_valid_registration(self):
        request = RegisterRequest(**VALID_REGISTRATION)
        assert request.username == "alice01"
        assert request.confirm_password is None

    def test_confirm_password_accepted_by_alias(self):
        """Test the JSON field name confirmPassword populates confirm_password."""
        request = RegisterRequest(**VALID_REGISTRATION, confirmPassword="Passw0rd")
        assert request.confirm_password == "Passw0rd"

    def test_confirm_password_mismatch_fails(self):
        with pytest.raises(ValidationError) as exc_info:
            RegisterRequest(**VALID_REGISTRATION, confirm_password="Passw0rd2")

        assert "must match" in str(exc_info.value)

    @pytest.mark.parametrize("username", ["abcde", "a" * 30])
    def test_username_at_limits_passes(self, username):
        request = RegisterRequest(**{**VALID_REGISTRATION, "username": username})
        assert request.username == username

    @pytest.mark.parametrize("username", ["abcd", "a" * 31])
    def test_username_out_of_range_fails(self, username):
        with pytest.raises(ValidationError):
            RegisterRequest(**{**VALID_REGISTRATION, "username": username})

    def test_name_too_long_fails(self):
        with pytest.raises(ValidationError):
            RegisterRequest(**{**VALID_REGISTRATION, "name": "n" * 31})

    @pytest.mark.parametrize("email", ["alice", "alice@", "alice@example", "a b@example.com"])
    def test_malformed_email_fails(self, email):
        with pytest.raises(ValidationError):
            RegisterRequest(**{**VALID_REGISTRATION, "email": email})

    @pytest.mark.parametrize("password", ["Passw0rd", "aB3" + "x" * 27])
    def test_password_policy_accepts(self, password):
        request = RegisterRequest(**{**VALID_REGISTRATION, "password": password})
        assert request.password == password

    @pytest.mark.parametrize(
        "password",
        [
            "Pass0rd",  # too short
            "aB3" + "x" * 28,  # too long
            "password1",  # no uppercase
            "PASSWORD1",  # no lowercase
            "Password",  # no digit
            "Passw0rd_",  # non-alphanumeric
        ],
    )
    def test_password_policy_rejects(self, password):
        with pytest.raises(ValidationError):
            RegisterRequest(**{**VALID_REGISTRATION, "password": password})

    def test_missing_field_fails(self):
        fields = dict(VALID_REGISTRATION)
        del fields["email"]
        with pytest.raises(ValidationError):
            RegisterRequest(**fields)


class TestLoginRequest:
    """Tests for LoginRequest validation."""

    def test_valid_login(self):
        request = LoginRequest(username="alice01", password="Passw0rd")
        assert request.username == "alice01"

    def test_short_username_fails(self):
        with pytest.raises(ValidationError):
            LoginRequest(username="abc", password="Passw0rd")

    def test_weak_password_fails(self):
        with pytest.raises(ValidationError):
            LoginRequest(username="alice01", password="weak")


class TestUser:
    """Tests for the stored user and its public projection."""

    def test_hash_excluded_from_dump(self):
        user = _user()
        assert "password_hash" not in user.model_dump()
        assert "password_hash" not in user.model_dump_json()

    def test_hash_excluded_from_repr(self):
        assert "$2b$10$somehashvalue" not in repr(_user())

    def test_identity_projection(self):
        user = _user()

        identity = AuthenticatedIdentity.from_user(user)

        assert identity.id == user.id
        assert identity.username == user.username
        assert identity.name == user.name
        assert set(identity.model_dump()) == {"id", "username", "name"}


class TestTokenPair:
    """Tests for TokenPair."""

    def test_tokens_hidden_from_repr(self):
        pair = TokenPair(access_token="access-value", refresh_token="refresh-value")

        assert "access-value" not in repr(pair)
        assert "refresh-value" not in repr(pair)


class TestAuthResponse:
    """Tests for AuthResponse."""

    def test_signed_out_shape(self):
        assert AuthResponse(auth=False).model_dump() == {"user": None, "auth": False}

    def test_signed_in_shape(self):
        identity = AuthenticatedIdentity.from_user(_user())

        body = AuthResponse(user=identity, auth=True).model_dump(mode="json")

        assert body["auth"] is True
        assert body["user"] == {
            "id": str(identity.id),
            "username": "alice01",
            "name": "Alice",
        }
