"""FastAPI routes for the Catalogue domain."""

from fastapi import APIRouter, Depends

from catalogue.product.listing import list_products
from identity.api.auth import Principal, require_admin

admin_product_router = APIRouter(prefix="/api/admin/products", tags=["admin"])


@admin_product_router.get("")
async def products(_: Principal = Depends(require_admin)):
    return {"products": [product.to_dict() for product in list_products()]}
