"""FastAPI routes for the Ordering domain: placement, tracking and order administration."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from protean.exceptions import ValidationError
from protean.utils.globals import current_domain

from identity.api.auth import Principal, require_admin, require_principal
from identity.domain import identity
from identity.user.queries import count_users
from ordering.api.schemas import UpdateStatusRequest
from ordering.order.dashboard import dashboard_summary
from ordering.order.deletion import DeleteOrder
from ordering.order.placement import _UNSET, place_order
from ordering.order.queries import all_orders, get_order, owner_order, owner_orders
from ordering.order.status import UpdateOrderStatus
from ordering.order.tracking import track_order
from shared.web import get_dispatcher


async def _json_body(request: Request) -> dict:
    try:
        payload = await request.json()
    except ValueError:
        raise ValidationError({"body": ["Request body must be valid JSON."]}) from None
    if not isinstance(payload, dict):
        raise ValidationError({"body": ["Request body must be a JSON object."]})
    return payload


def _place(principal: Principal, payload: dict, dispatcher):
    order = place_order(
        owner_id=principal.user_id,
        owner_email=principal.user_email,
        items=payload.get("items"),
        client_total=payload["totalPrice"] if "totalPrice" in payload else _UNSET,
        shipping_address=payload.get("shippingAddress"),
        dispatcher=dispatcher,
    )
    return JSONResponse(
        status_code=201,
        content={"success": True, "message": "Order placed successfully", "order": order.to_dict()},
    )


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.post("/place", status_code=201)
async def place(request: Request, principal: Principal = Depends(require_principal), dispatcher=Depends(get_dispatcher)):
    return _place(principal, await _json_body(request), dispatcher)


@order_router.get("/my-orders")
async def my_orders(principal: Principal = Depends(require_principal)):
    return {"success": True, "orders": [o.to_dict() for o in owner_orders(principal.user_id or "")]}


@order_router.get("/track/{tracking_id}")
async def track(tracking_id: str, email: str = ""):
    return {"success": True, "order": track_order(tracking_id, email)}


@order_router.get("/admin/all-orders")
async def admin_all_orders(_: Principal = Depends(require_admin)):
    return {"success": True, "orders": [o.to_dict() for o in all_orders()]}


@order_router.put("/admin/{order_id}")
async def update_status(order_id: str, body: UpdateStatusRequest, _: Principal = Depends(require_admin)):
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    return {
        "success": True,
        "message": "Order status updated successfully.",
        "order": get_order(order_id).to_dict(),
    }


@order_router.delete("/admin/{order_id}")
async def delete(order_id: str, _: Principal = Depends(require_admin)):
    current_domain.process(DeleteOrder(order_id=order_id), asynchronous=False)
    return {"success": True, "message": "Order deleted successfully."}


# ---------------------------------------------------------------------------
# Customer order history (mounted under /api/users)
# ---------------------------------------------------------------------------
user_order_router = APIRouter(prefix="/api/users/orders", tags=["orders"])


@user_order_router.post("", status_code=201)
async def place_from_account(
    request: Request, principal: Principal = Depends(require_principal), dispatcher=Depends(get_dispatcher)
):
    return _place(principal, await _json_body(request), dispatcher)


@user_order_router.get("")
async def order_history(principal: Principal = Depends(require_principal)):
    return {"success": True, "orders": [o.to_dict() for o in owner_orders(principal.user_id or "")]}


@user_order_router.get("/{order_id}")
async def order_detail(order_id: str, principal: Principal = Depends(require_principal)):
    return {"success": True, "order": owner_order(order_id, principal.user_id).to_dict()}


# ---------------------------------------------------------------------------
# Admin console (mounted under /api/admin)
# ---------------------------------------------------------------------------
admin_order_router = APIRouter(prefix="/api/admin", tags=["admin"])


@admin_order_router.get("/dashboard")
async def dashboard(_: Principal = Depends(require_admin)):
    with identity.domain_context():
        total_customers = count_users()
    return dashboard_summary(total_customers)


@admin_order_router.get("/orders")
async def admin_orders(_: Principal = Depends(require_admin)):
    return {"orders": [o.to_dict() for o in all_orders()]}
