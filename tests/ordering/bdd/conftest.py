"""Shared BDD fixtures and step definitions for the Ordering domain."""

import pytest
from ordering.order.order import Order
from ordering.order.placement import place_order
from protean import current_domain
from pytest_bdd import given, parsers, then


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured errors."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a signed-in customer "{email}"'), target_fixture="customer")
def signed_in_customer(email):
    return {"id": "user-bdd-001", "email": email}


@given(parsers.cfparse('an order placed by "{email}"'), target_fixture="order")
def order_placed_by(email):
    return place_order("user-bdd-001", email, [{"name": "Brass Lamp", "quantity": 1, "price": 10}])


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("no order is stored")
def no_order_stored():
    assert current_domain.repository_for(Order).find_all() == []
