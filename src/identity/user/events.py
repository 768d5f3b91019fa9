"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from identity.domain import identity


@identity.event(part_of="User")
class UserRegistered:
    __version__ = 1

    user_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    email = String(required=True, max_length=254)
    registered_at = DateTime(required=True)


@identity.event(part_of="User")
class UserVerified:
    __version__ = 1

    user_id = Identifier(required=True)
    verified_at = DateTime(required=True)


@identity.event(part_of="User")
class PasswordResetRequested:
    __version__ = 1

    user_id = Identifier(required=True)
    requested_at = DateTime(required=True)
