"""Identity domain API package."""

from identity.api.routes import admin_router, user_router

__all__ = ["admin_router", "user_router"]
