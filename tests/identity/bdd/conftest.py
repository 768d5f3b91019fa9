"""Shared BDD fixtures and step definitions for the Identity domain."""

from identity.user.registration import register_user
from identity.user.user import User
from protean import current_domain
from pytest_bdd import given, parsers


@given(parsers.cfparse('a customer registered as "{email}"'), target_fixture="registered")
def customer_registered(email):
    register_user("Ayesha Khan", email)
    user = current_domain.repository_for(User).find_by_email(email)
    return {"email": email, "token": user.verification_token}
