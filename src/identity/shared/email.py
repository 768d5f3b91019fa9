"""EmailAddress value object for validated email addresses."""

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from identity.domain import identity


def normalize_email(value) -> str:
    """Trim and lower-case an email; ``None`` becomes an empty string."""
    return str(value or "").strip().lower()


@identity.value_object
class EmailAddress:
    """A structurally valid email address: one @, a dotted domain, no whitespace."""

    address: String(required=True, max_length=254)

    @invariant.post
    def verify_email_address(self):
        email = self.address

        if any(ch.isspace() for ch in email) or email.count("@") != 1:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        local_part, domain_part = email.split("@", 1)

        if not local_part or local_part.startswith(".") or local_part.endswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if "." not in domain_part or domain_part.startswith(".") or domain_part.endswith("."):
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        if ".." in email:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})
