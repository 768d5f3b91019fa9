"""Bearer-token gate and admin gate for the HTTP API.

A token resolves to a customer, an administrator, or both when the same ID
exists in each table. Routes that need a customer read ``user_id`` and
``user_email``; admin routes depend on ``require_admin``.
"""

from dataclasses import dataclass

import structlog
from fastapi import Depends, Header, Request

from identity.admin.management import find_admin
from identity.domain import identity
from identity.shared.tokens import InvalidToken, decode_token
from identity.user.queries import find_user
from shared.errors import Forbidden, Unauthenticated

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Principal:
    account_id: str
    user_id: str | None = None
    user_email: str | None = None
    user: dict | None = None
    admin_id: str | None = None

    @property
    def is_admin(self) -> bool:
        return self.admin_id is not None


async def require_principal(request: Request, authorization: str = Header(default="")) -> Principal:
    if not authorization.startswith("Bearer"):
        raise Unauthenticated("Not authorized, no token")

    parts = authorization.split(" ", 1)
    token = parts[1].strip() if len(parts) == 2 else ""
    if not token:
        raise Unauthenticated("Not authorized, no token")

    try:
        account_id = decode_token(token, request.app.state.settings)
    except InvalidToken as exc:
        logger.info("Rejected bearer token", error=str(exc))
        raise Unauthenticated("Not authorized, token failed") from exc

    with identity.domain_context():
        user = find_user(account_id)
        admin = find_admin(account_id)

    if user is None and admin is None:
        raise Unauthenticated("Not authorized, token failed")

    return Principal(
        account_id=account_id,
        user_id=str(user.id) if user else None,
        user_email=user.email if user else None,
        user=user.to_dict() if user else None,
        admin_id=str(admin.id) if admin else None,
    )


async def require_admin(principal: Principal = Depends(require_principal)) -> Principal:
    if not principal.is_admin:
        raise Forbidden("Not authorized as an admin")
    return principal
