"""User aggregate: a storefront customer account.

Accounts are created unverified without a password. The verification link
lets the customer set a password, which verifies the account; a reset link
does the same for an existing account.
"""

import secrets
from datetime import UTC, datetime, timedelta

from protean.fields import Boolean, DateTime, String

from identity.domain import identity
from identity.shared.passwords import hash_password
from identity.user.events import PasswordResetRequested, UserRegistered, UserVerified

TOKEN_LIFETIME = timedelta(hours=1)


def _new_token() -> str:
    return secrets.token_hex(32)


def _is_live(expires_at) -> bool:
    if expires_at is None:
        return False
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=UTC)
    return expires_at > datetime.now(UTC)


@identity.aggregate
class User:
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254, unique=True)
    password_hash = String(max_length=255)
    role = String(max_length=20, default="user")
    is_verified = Boolean(default=False)
    verification_token = String(max_length=64)
    verification_token_expires = DateTime()
    reset_password_token = String(max_length=64)
    reset_password_expires = DateTime()
    created_at = DateTime()

    @classmethod
    def register(cls, name, email):
        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=email,
            is_verified=False,
            verification_token=_new_token(),
            verification_token_expires=now + TOKEN_LIFETIME,
            created_at=now,
        )
        user.raise_(UserRegistered(user_id=str(user.id), name=name, email=email, registered_at=now))
        return user

    def reissue_verification(self):
        self.verification_token = _new_token()
        self.verification_token_expires = datetime.now(UTC) + TOKEN_LIFETIME

    def has_live_verification_token(self) -> bool:
        return _is_live(self.verification_token_expires)

    def has_live_reset_token(self) -> bool:
        return _is_live(self.reset_password_expires)

    def set_password(self, password):
        """Set the first password from a verification link; verifies the account."""
        now = datetime.now(UTC)
        self.password_hash = hash_password(password)
        self.is_verified = True
        self.verification_token = None
        self.verification_token_expires = None
        self.raise_(UserVerified(user_id=str(self.id), verified_at=now))

    def request_password_reset(self):
        now = datetime.now(UTC)
        self.reset_password_token = _new_token()
        self.reset_password_expires = now + TOKEN_LIFETIME
        self.raise_(PasswordResetRequested(user_id=str(self.id), requested_at=now))

    def reset_password(self, password):
        self.password_hash = hash_password(password)
        self.is_verified = True
        self.reset_password_token = None
        self.reset_password_expires = None

    def to_dict(self) -> dict:
        """Public view; credentials and tokens are never included."""
        return {
            "id": str(self.id),
            "name": self.name,
            "email": self.email,
            "role": self.role,
            "is_verified": self.is_verified,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
