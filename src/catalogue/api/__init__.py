"""Catalogue domain API package."""

from catalogue.api.routes import admin_product_router

__all__ = ["admin_product_router"]
