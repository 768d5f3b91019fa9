"""Customer registration: command, handler and entry point."""

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.domain import identity
from identity.shared.email import EmailAddress, normalize_email
from identity.user.user import User

logger = structlog.get_logger(__name__)

CREATED = "created"
REISSUED = "reissued"


@identity.command(part_of="User")
class RegisterUser:
    """Create an unverified account, or reissue the link for one that is still unverified."""

    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)


@identity.command_handler(part_of=User)
class RegisterUserHandler:
    @handle(RegisterUser)
    def register_user(self, command):
        repo = current_domain.repository_for(User)
        existing = repo.find_by_email(command.email)

        if existing is not None:
            if existing.is_verified:
                raise ValidationError({"email": ["User already exists and is verified. Please log in."]})
            existing.reissue_verification()
            repo.add(existing)
            return {"outcome": REISSUED, "token": existing.verification_token}

        user = User.register(name=command.name, email=command.email)
        repo.add(user)
        return {"outcome": CREATED, "token": user.verification_token}


def register_user(name, email, dispatcher=None) -> str:
    """Register a customer and send the verification link.

    Returns ``"created"`` for a new account and ``"reissued"`` when an
    unverified account got a fresh link.
    """
    name = str(name or "").strip()
    email = normalize_email(email)
    if not name or not email:
        raise ValidationError({"registration": ["Name and email are required"]})
    EmailAddress(address=email)

    result = current_domain.process(RegisterUser(name=name, email=email), asynchronous=False)
    logger.info("User registration", email=email, outcome=result["outcome"])

    if dispatcher is not None:
        dispatcher.verification_requested(email, result["token"])
    return result["outcome"]
