"""Product listing for the admin console."""

from protean.utils.globals import current_domain

from catalogue.product.product import Product


def list_products() -> list[Product]:
    return current_domain.repository_for(Product)._dao.query.all().items
