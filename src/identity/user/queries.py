"""Read-side lookups over user accounts."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from identity.user.user import User


def list_users() -> list[User]:
    """Every account, newest first."""
    return current_domain.repository_for(User).find_all()


def count_users() -> int:
    return len(current_domain.repository_for(User).find_all())


def find_user(user_id) -> User | None:
    try:
        return current_domain.repository_for(User).get(user_id)
    except ObjectNotFoundError:
        return None
