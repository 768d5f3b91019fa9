"""Forgotten passwords: reset request and reset."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.shared.email import normalize_email
from identity.shared.passwords import check_password_policy
from identity.user.user import User

logger = structlog.get_logger(__name__)


@identity.command(part_of="User")
class RequestPasswordReset:
    email = String(required=True, max_length=254)


@identity.command(part_of="User")
class ResetPassword:
    token = String(max_length=64)
    new_password = String(max_length=128)


@identity.command_handler(part_of=User)
class PasswordResetHandler:
    @handle(RequestPasswordReset)
    def request_password_reset(self, command):
        repo = current_domain.repository_for(User)
        user = repo.find_by_email(command.email)
        if user is None:
            return None

        user.request_password_reset()
        repo.add(user)
        return {"email": user.email, "name": user.name, "token": user.reset_password_token}

    @handle(ResetPassword)
    def reset_password(self, command):
        if not command.token or not command.new_password:
            raise ValidationError({"reset": ["Token and new password are required."]})
        check_password_policy(command.new_password)

        repo = current_domain.repository_for(User)
        user = repo.find_by_reset_token(command.token)
        if user is None or not user.has_live_reset_token():
            raise ValidationError({"token": ["Invalid or expired password reset token."]})

        user.reset_password(command.new_password)
        repo.add(user)
        return str(user.id)


def forgot_password(email, dispatcher=None) -> None:
    """Send a reset link if the account exists; the caller never learns which."""
    email = normalize_email(email)
    if not email:
        return

    result = current_domain.process(RequestPasswordReset(email=email), asynchronous=False)
    if result is None:
        logger.info("Password reset requested for unknown email")
        return

    if dispatcher is not None:
        dispatcher.password_reset_requested(result["email"], result["name"], result["token"])
