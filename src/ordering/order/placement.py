"""Order placement: validation, tracking IDs, the PlaceOrder command and its handler.

``place_order`` is the entry point used by the HTTP routes: it checks the
caller and the payload, persists the order through the command handler, and
only then hands the confirmation email to the dispatcher without waiting.
"""

import json
import math
import random
import time
from collections.abc import Mapping
from numbers import Real

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from ordering.domain import ordering
from ordering.order.order import Order
from shared.errors import Conflict, Unauthenticated

logger = structlog.get_logger(__name__)

MAX_TRACKING_ID_ATTEMPTS = 5

_UNSET = object()


# ---------------------------------------------------------------------------
# Input normalization
# ---------------------------------------------------------------------------
def _is_number(value) -> bool:
    """Finite reals only. JSON bodies may carry NaN, Infinity or integers too large for a float."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def validate_items(items) -> list[dict]:
    """Return normalized item dicts, or raise on the first malformed item.

    ``image_src`` is carried through for the confirmation email only.
    """
    if not isinstance(items, list) or not items:
        raise ValidationError({"items": ["Items array is required and cannot be empty."]})

    normalized = []
    for position, item in enumerate(items, start=1):
        if not isinstance(item, Mapping):
            raise ValidationError({"items": [f"Item {position} must be an object with name, quantity and price."]})

        name = item.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValidationError({"items": [f"Item {position}: name is required."]})

        quantity = item.get("quantity")
        if not _is_number(quantity):
            raise ValidationError({"items": [f"Item {position}: quantity must be a number."]})
        if quantity < 1 or quantity != int(quantity):
            raise ValidationError({"items": [f"Item {position}: quantity must be a whole number of at least 1."]})

        price = item.get("price")
        if not _is_number(price):
            raise ValidationError({"items": [f"Item {position}: price must be a number."]})
        if price < 0:
            raise ValidationError({"items": [f"Item {position}: price cannot be negative."]})

        image_src = item.get("image_src") or item.get("imageSrc") or ""
        if not isinstance(image_src, str):
            raise ValidationError({"items": [f"Item {position}: image must be a URL string."]})

        normalized.append(
            {
                "name": name.strip(),
                "quantity": int(quantity),
                "price": float(price),
                "image_src": image_src,
            }
        )

    if not math.isfinite(sum(item["price"] * item["quantity"] for item in normalized)):
        raise ValidationError({"items": ["Order total is too large."]})

    return normalized


def validate_client_total(client_total) -> float | None:
    """A caller-supplied total must be numeric; it is never trusted over the items."""
    if client_total is _UNSET or client_total is None:
        return None
    if not _is_number(client_total):
        raise ValidationError({"total_price": ["totalPrice must be a number."]})
    return float(client_total)


def format_shipping_address(address) -> str | None:
    """Flatten a structured address into a single display line.

    Strings are kept as given. Mappings join name, line1, line2,
    "city state postalCode", country and "Phone: <phone>", skipping empty parts.
    """
    if not address:
        return None
    if isinstance(address, str):
        return address.strip() or None
    if not isinstance(address, Mapping):
        raise ValidationError({"shipping_address": ["Shipping address must be a string or an object."]})

    def part(key):
        value = address.get(key)
        return str(value).strip() if value not in (None, "") else ""

    locality = " ".join(p for p in (part("city"), part("state"), part("postalCode") or part("postal_code")) if p)
    phone = part("phone")
    parts = [
        part("name"),
        part("line1"),
        part("line2"),
        locality,
        part("country"),
        f"Phone: {phone}" if phone else "",
    ]
    return ", ".join(p for p in parts if p) or None


def generate_tracking_id(now_ms: int | None = None, rng: random.Random | None = None) -> str:
    """Return ``TRK-<epoch-ms>-<100..999>``. Uniqueness is checked by the caller."""
    now_ms = int(time.time() * 1000) if now_ms is None else now_ms
    suffix = (rng or random).randint(100, 999)
    return f"TRK-{now_ms}-{suffix}"


# ---------------------------------------------------------------------------
# Command and handler
# ---------------------------------------------------------------------------
@ordering.command(part_of="Order")
class PlaceOrder:
    """Place an order for the authenticated caller."""

    owner_id = Identifier(required=True)
    owner_email = String(required=True, max_length=254)
    items = Text(required=True)  # JSON: list of validated {name, quantity, price}
    shipping_address = Text()


@ordering.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        repo = current_domain.repository_for(Order)
        items_data = json.loads(command.items) if isinstance(command.items, str) else command.items

        tracking_id = None
        for _ in range(MAX_TRACKING_ID_ATTEMPTS):
            candidate = generate_tracking_id()
            if repo.find_by_tracking_id(candidate) is None:
                tracking_id = candidate
                break
            logger.warning("Tracking ID collision, regenerating", tracking_id=candidate)

        if tracking_id is None:
            raise Conflict("Could not allocate a unique tracking ID. Please retry.")

        order = Order.place(
            owner_id=command.owner_id,
            customer_email=command.owner_email,
            items_data=items_data,
            tracking_id=tracking_id,
            shipping_address=command.shipping_address,
        )
        repo.add(order)
        return str(order.id)


# ---------------------------------------------------------------------------
# Workflow entry point
# ---------------------------------------------------------------------------
def place_order(
    owner_id,
    owner_email,
    items,
    client_total=_UNSET,
    shipping_address=None,
    dispatcher=None,
) -> Order:
    """Validate, persist and confirm a new order.

    Args:
        owner_id: Identity placing the order, supplied by the auth gate.
        owner_email: That identity's email; stored normalized on the order.
        items: List of ``{name, quantity, price, image_src?}`` mappings.
        client_total: Optional caller-computed total. Validated, then ignored:
            the stored total is always recomputed from the items.
        shipping_address: Optional string or structured address.
        dispatcher: ``NotificationDispatcher`` for the confirmation email.
            The email is submitted after the order is persisted and never
            awaited.
    """
    if not owner_id or not owner_email or not str(owner_email).strip():
        raise Unauthenticated("Unauthorized. User data is incomplete.")

    customer_email = str(owner_email).strip().lower()
    normalized_items = validate_items(items)
    supplied_total = validate_client_total(client_total)
    address_display = format_shipping_address(shipping_address)

    order_id = current_domain.process(
        PlaceOrder(
            owner_id=str(owner_id),
            owner_email=customer_email,
            items=json.dumps([{k: item[k] for k in ("name", "quantity", "price")} for item in normalized_items]),
            shipping_address=address_display,
        ),
        asynchronous=False,
    )
    order = current_domain.repository_for(Order).get(order_id)

    if supplied_total is not None and abs(supplied_total - order.total_price) > 1e-9:
        logger.warning(
            "Client total differs from recomputed total",
            order_id=order_id,
            client_total=supplied_total,
            total_price=order.total_price,
        )

    logger.info("Order placed", order_id=order_id, tracking_id=order.tracking_id, owner_id=str(owner_id))

    if dispatcher is not None:
        try:
            dispatcher.order_placed(order, normalized_items, address_display)
        except Exception as exc:
            logger.error("Could not submit order confirmation", order_id=order_id, error=str(exc))

    return order
