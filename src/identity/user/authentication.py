"""Customer login."""

from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from identity.shared.email import normalize_email
from identity.shared.passwords import verify_password
from identity.user.user import User
from shared.errors import Forbidden


def authenticate_user(email, password) -> User:
    """Return the user whose credentials match; unverified accounts are refused."""
    user = current_domain.repository_for(User).find_by_email(normalize_email(email))
    if user is None:
        raise ValidationError({"credentials": ["Invalid credentials"]})

    if not user.is_verified:
        raise Forbidden("Please verify your email first.")

    if not verify_password(password, user.password_hash):
        raise ValidationError({"credentials": ["Invalid credentials"]})

    return user
