"""Password hashing with bcrypt."""

import bcrypt
from protean.exceptions import ValidationError

MIN_PASSWORD_LENGTH = 6


def check_password_policy(password) -> None:
    if not password:
        raise ValidationError({"password": ["New password is required."]})
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError({"password": [f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."]})


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str | None, password_hash: str | None) -> bool:
    if not password or not password_hash:
        return False
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
