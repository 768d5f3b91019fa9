"""Application tests for order placement through place_order()."""

import re

import pytest
from notifications.channel.fake_email import FakeEmailAdapter
from notifications.dispatcher import NotificationDispatcher
from ordering.order import placement
from ordering.order.order import Order
from ordering.order.placement import MAX_TRACKING_ID_ATTEMPTS, PlaceOrder, place_order
from protean import current_domain
from protean.exceptions import ValidationError
from shared.config import Settings
from shared.errors import Conflict, Unauthenticated

ITEMS = [
    {"name": "Brass Lamp", "quantity": 1, "price": 10},
    {"name": "Linen Napkin", "quantity": 2, "price": 5},
]


def _stored_orders():
    return current_domain.repository_for(Order).find_all()


@pytest.fixture()
def email_channel():
    return FakeEmailAdapter()


@pytest.fixture()
def dispatcher(email_channel):
    dispatcher = NotificationDispatcher(email_channel, Settings(environment="test"))
    yield dispatcher
    email_channel.release()
    dispatcher.shutdown()


class TestPlaceOrder:
    def test_widget_scenario(self):
        order = place_order("user-001", "a@b.com", [{"name": "Widget", "quantity": 2, "price": 10}])
        assert order.total_price == 20
        assert order.status == "Processing"
        assert re.fullmatch(r"TRK-\d+-\d{3}", order.tracking_id)

    def test_persists_order_with_recomputed_total(self):
        order = place_order("user-001", "Ayesha@Example.com", ITEMS)

        stored = current_domain.repository_for(Order).get(order.id)
        assert stored.total_price == 20.0
        assert stored.status == "Processing"
        assert stored.customer_email == "ayesha@example.com"
        assert str(stored.owner_id) == "user-001"
        assert re.fullmatch(r"TRK-\d+-\d{3}", stored.tracking_id)

    def test_client_total_is_ignored(self):
        order = place_order("user-001", "ayesha@example.com", ITEMS, client_total=999)
        assert order.total_price == 20.0

    def test_non_numeric_client_total_rejected(self):
        with pytest.raises(ValidationError):
            place_order("user-001", "ayesha@example.com", ITEMS, client_total="20")
        assert _stored_orders() == []

    def test_structured_shipping_address_is_stored_flat(self):
        order = place_order(
            "user-001",
            "ayesha@example.com",
            ITEMS,
            shipping_address={"line1": "12 Canal View", "city": "Lahore", "country": "Pakistan"},
        )
        assert order.shipping_address == "12 Canal View, Lahore, Pakistan"

    def test_invalid_item_persists_nothing(self):
        with pytest.raises(ValidationError) as exc_info:
            place_order("user-001", "ayesha@example.com", [*ITEMS, {"name": "Vase", "quantity": "x", "price": 3}])
        assert exc_info.value.messages["items"] == ["Item 3: quantity must be a number."]
        assert _stored_orders() == []

    @pytest.mark.parametrize("owner_id, email", [(None, "ayesha@example.com"), ("user-001", None), ("user-001", " ")])
    def test_incomplete_identity_is_unauthenticated(self, owner_id, email):
        with pytest.raises(Unauthenticated):
            place_order(owner_id, email, ITEMS)
        assert _stored_orders() == []

    def test_identity_is_checked_before_items(self):
        with pytest.raises(Unauthenticated):
            place_order(None, None, [])

    def test_thousand_placements_get_distinct_tracking_ids(self):
        tracking_ids = {
            place_order("user-001", "ayesha@example.com", ITEMS[:1]).tracking_id for _ in range(1000)
        }
        assert len(tracking_ids) == 1000


class TestTrackingIdCollisions:
    def test_collision_is_regenerated(self, monkeypatch):
        first = place_order("user-001", "ayesha@example.com", ITEMS)
        candidates = iter([first.tracking_id, first.tracking_id, "TRK-1700000000000-555"])
        monkeypatch.setattr(placement, "generate_tracking_id", lambda: next(candidates))

        second = place_order("user-002", "bilal@example.com", ITEMS)
        assert second.tracking_id == "TRK-1700000000000-555"

    def test_gives_up_with_conflict(self, monkeypatch):
        first = place_order("user-001", "ayesha@example.com", ITEMS)
        calls = []

        def always_taken():
            calls.append(1)
            return first.tracking_id

        monkeypatch.setattr(placement, "generate_tracking_id", always_taken)

        with pytest.raises(Conflict):
            place_order("user-002", "bilal@example.com", ITEMS)
        assert len(calls) == MAX_TRACKING_ID_ATTEMPTS
        assert len(_stored_orders()) == 1


class TestPlacementCommand:
    def test_command_handler_returns_order_id(self):
        order_id = current_domain.process(
            PlaceOrder(
                owner_id="user-001",
                owner_email="ayesha@example.com",
                items='[{"name": "Lamp", "quantity": 3, "price": 4.5}]',
            ),
            asynchronous=False,
        )
        order = current_domain.repository_for(Order).get(order_id)
        assert order.total_price == 13.5


class TestConfirmationEmail:
    def test_confirmation_sent_after_persisting(self, dispatcher, email_channel):
        order = place_order(
            "user-001",
            "ayesha@example.com",
            [{"name": "Brass Lamp", "quantity": 1, "price": 1234.5, "image_src": "https://cdn.example/lamp.jpg"}],
            shipping_address="12 Canal View, Lahore",
            dispatcher=dispatcher,
        )
        dispatcher.wait_idle(timeout=5)

        assert len(email_channel.sent_emails) == 1
        email = email_channel.sent_emails[0]
        assert email["to"] == "ayesha@example.com"
        assert email["subject"] == f"Your Order Confirmation - #{order.id}"
        assert "PKR 1,234.5" in email["html_body"]
        assert f"https://theordnery.com/track/{order.tracking_id}" in email["html_body"]
        assert "https://cdn.example/lamp.jpg" in email["html_body"]
        assert "12 Canal View, Lahore" in email["html_body"]

    def test_placement_does_not_wait_for_delivery(self, dispatcher, email_channel):
        email_channel.configure(hold=True)

        order = place_order("user-001", "ayesha@example.com", ITEMS, dispatcher=dispatcher)

        assert current_domain.repository_for(Order).get(order.id) is not None
        assert email_channel.sent_emails == []

        email_channel.release()
        dispatcher.wait_idle(timeout=5)
        assert len(email_channel.sent_emails) == 1

    def test_failed_delivery_leaves_order_in_place(self, dispatcher, email_channel):
        email_channel.configure(should_raise=True, failure_reason="SMTP down")

        order = place_order("user-001", "ayesha@example.com", ITEMS, dispatcher=dispatcher)
        dispatcher.wait_idle(timeout=5)

        assert current_domain.repository_for(Order).get(order.id).status == "Processing"
        assert email_channel.sent_emails == []

    def test_dispatcher_submission_error_does_not_fail_placement(self):
        class BrokenDispatcher:
            def order_placed(self, *args, **kwargs):
                raise RuntimeError("executor is shut down")

        order = place_order("user-001", "ayesha@example.com", ITEMS, dispatcher=BrokenDispatcher())
        assert current_domain.repository_for(Order).get(order.id).total_price == 20.0
