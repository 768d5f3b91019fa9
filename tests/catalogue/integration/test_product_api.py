"""Integration tests for the admin product listing."""

from catalogue.product.product import Product
from protean import current_domain


class TestAdminProducts:
    def test_lists_products_for_admin(self, client, admin_headers):
        current_domain.repository_for(Product).add(Product.create(name="Brass Lamp", sku="LAMP-001", price=2499.0))

        response = client.get("/api/admin/products", headers=admin_headers)
        assert response.status_code == 200
        products = response.json()["products"]
        assert [p["name"] for p in products] == ["Brass Lamp"]

    def test_customers_are_forbidden(self, client, customer_headers):
        assert client.get("/api/admin/products", headers=customer_headers).status_code == 403

    def test_anonymous_is_unauthenticated(self, client):
        assert client.get("/api/admin/products").status_code == 401
