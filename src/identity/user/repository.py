"""Repository for the User aggregate."""

from datetime import UTC, datetime

from identity.domain import identity
from identity.user.user import User

_EPOCH = datetime.min.replace(tzinfo=UTC)


@identity.repository(part_of=User)
class UserRepository:
    def _first(self, **filters) -> User | None:
        results = self._dao.query.filter(**filters).all().items
        return results[0] if results else None

    def find_by_email(self, email: str) -> User | None:
        return self._first(email=email)

    def find_by_verification_token(self, token: str) -> User | None:
        return self._first(verification_token=token) if token else None

    def find_by_reset_token(self, token: str) -> User | None:
        return self._first(reset_password_token=token) if token else None

    def find_all(self) -> list[User]:
        users = self._dao.query.all().items
        return sorted(users, key=lambda user: user.created_at or _EPOCH, reverse=True)
