"""Email verification and first password."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.shared.passwords import check_password_policy
from identity.user.user import User


def verify_email(token, frontend_url: str) -> str:
    """Return the set-password URL for a live verification token.

    The token is left in place so the set-password step can find the account.
    """
    user = current_domain.repository_for(User).find_by_verification_token(token)
    if user is None or not user.has_live_verification_token():
        raise ValidationError({"token": ["Invalid or expired verification token."]})
    return f"{frontend_url}/set-password?token={token}"


@identity.command(part_of="User")
class SetPassword:
    token = String(max_length=64)
    new_password = String(max_length=128)


@identity.command_handler(part_of=User)
class SetPasswordHandler:
    @handle(SetPassword)
    def set_password(self, command):
        check_password_policy(command.new_password)

        repo = current_domain.repository_for(User)
        user = repo.find_by_verification_token(command.token)
        if user is None or not user.has_live_verification_token():
            raise ValidationError({"token": ["Invalid or used token."]})

        user.set_password(command.new_password)
        repo.add(user)
        return str(user.id)
