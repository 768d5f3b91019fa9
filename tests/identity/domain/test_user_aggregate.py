"""Tests for the User aggregate: registration, verification and password resets."""

from datetime import UTC, datetime, timedelta

from identity.shared.passwords import verify_password
from identity.user.events import PasswordResetRequested, UserRegistered, UserVerified
from identity.user.user import TOKEN_LIFETIME, User


def _user():
    return User.register(name="Ayesha Khan", email="ayesha@example.com")


class TestUserRegistration:
    def test_starts_unverified_without_password(self):
        user = _user()
        assert user.is_verified is False
        assert user.password_hash is None
        assert user.role == "user"

    def test_issues_live_verification_token(self):
        user = _user()
        assert len(user.verification_token) == 64
        assert user.has_live_verification_token()
        remaining = user.verification_token_expires - datetime.now(UTC)
        assert timedelta(minutes=59) < remaining <= TOKEN_LIFETIME

    def test_raises_user_registered(self):
        user = _user()
        assert isinstance(user._events[0], UserRegistered)
        assert user._events[0].email == "ayesha@example.com"

    def test_reissue_replaces_token(self):
        user = _user()
        old_token = user.verification_token
        user.reissue_verification()
        assert user.verification_token != old_token
        assert user.has_live_verification_token()

    def test_expired_token_is_not_live(self):
        user = _user()
        user.verification_token_expires = datetime.now(UTC) - timedelta(seconds=1)
        assert not user.has_live_verification_token()


class TestSetPassword:
    def test_verifies_and_clears_token(self):
        user = _user()
        user._events.clear()
        user.set_password("secret123")

        assert user.is_verified is True
        assert user.verification_token is None
        assert verify_password("secret123", user.password_hash)
        assert isinstance(user._events[-1], UserVerified)


class TestPasswordReset:
    def test_request_issues_reset_token(self):
        user = _user()
        user.set_password("secret123")
        user._events.clear()
        user.request_password_reset()

        assert user.has_live_reset_token()
        assert isinstance(user._events[-1], PasswordResetRequested)

    def test_reset_replaces_password_and_clears_token(self):
        user = _user()
        user.set_password("secret123")
        user.request_password_reset()
        user.reset_password("another-secret")

        assert user.reset_password_token is None
        assert not user.has_live_reset_token()
        assert verify_password("another-secret", user.password_hash)
        assert not verify_password("secret123", user.password_hash)


class TestUserView:
    def test_to_dict_has_no_secrets(self):
        user = _user()
        user.set_password("secret123")
        data = user.to_dict()
        assert data["email"] == "ayesha@example.com"
        for secret in ("password_hash", "verification_token", "reset_password_token"):
            assert secret not in data
