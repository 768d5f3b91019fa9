"""Admin aggregate: a back-office account with access to every order."""

from datetime import UTC, datetime

from protean.fields import DateTime, String

from identity.domain import identity
from identity.shared.passwords import hash_password


@identity.aggregate
class Admin:
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254, unique=True)
    password_hash = String(required=True, max_length=255)
    created_at = DateTime()

    @classmethod
    def register(cls, name, email, password):
        return cls(
            name=name,
            email=email,
            password_hash=hash_password(password),
            created_at=datetime.now(UTC),
        )

    def to_dict(self) -> dict:
        return {"id": str(self.id), "name": self.name, "email": self.email}
