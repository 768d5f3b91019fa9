"""Ordering domain API package."""

from ordering.api.routes import admin_order_router, order_router, user_order_router

__all__ = ["admin_order_router", "order_router", "user_order_router"]
