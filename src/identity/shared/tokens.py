"""Signed access tokens (JWT, HS256) carrying the account ID."""

from datetime import UTC, datetime, timedelta

import jwt

from shared.config import Settings

ALGORITHM = "HS256"


class InvalidToken(Exception):
    """The token is malformed, expired or signed with another key."""


def issue_token(account_id: str, settings: Settings) -> str:
    now = datetime.now(UTC)
    payload = {
        "id": str(account_id),
        "iat": now,
        "exp": now + timedelta(hours=settings.jwt_expires_hours),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=ALGORITHM)


def decode_token(token: str, settings: Settings) -> str:
    """Return the account ID carried by ``token``."""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[ALGORITHM])
    except jwt.PyJWTError as exc:
        raise InvalidToken(str(exc)) from exc

    account_id = payload.get("id")
    if not account_id:
        raise InvalidToken("Token has no account id")
    return str(account_id)
