"""Repository for the Admin aggregate."""

from identity.admin.admin import Admin
from identity.domain import identity


@identity.repository(part_of=Admin)
class AdminRepository:
    def find_by_email(self, email: str) -> Admin | None:
        results = self._dao.query.filter(email=email).all().items
        return results[0] if results else None
