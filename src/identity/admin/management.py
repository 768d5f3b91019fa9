"""Admin accounts: registration, login and lookup."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import String
from protean.utils.globals import current_domain

from identity.admin.admin import Admin
from identity.domain import identity
from identity.shared.email import normalize_email
from identity.shared.passwords import verify_password


@identity.command(part_of="Admin")
class RegisterAdmin:
    name = String(max_length=100)
    email = String(max_length=254)
    password = String(max_length=128)


@identity.command_handler(part_of=Admin)
class RegisterAdminHandler:
    @handle(RegisterAdmin)
    def register_admin(self, command):
        if not command.name or not command.email or not command.password:
            raise ValidationError({"admin": ["All fields are required"]})

        email = normalize_email(command.email)
        repo = current_domain.repository_for(Admin)
        if repo.find_by_email(email) is not None:
            raise ValidationError({"email": ["Admin already exists"]})

        admin = Admin.register(name=command.name.strip(), email=email, password=command.password)
        repo.add(admin)
        return str(admin.id)


def authenticate_admin(email, password) -> Admin:
    if not email or not password:
        raise ValidationError({"credentials": ["Email and password are required"]})

    admin = current_domain.repository_for(Admin).find_by_email(normalize_email(email))
    if admin is None or not verify_password(password, admin.password_hash):
        raise ValidationError({"credentials": ["Invalid credentials"]})
    return admin


def find_admin(admin_id) -> Admin | None:
    try:
        return current_domain.repository_for(Admin).get(admin_id)
    except ObjectNotFoundError:
        return None
