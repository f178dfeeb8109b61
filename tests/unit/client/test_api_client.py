"""Tests for ProductsClient, driven against the app through TestClient."""

from decimal import Decimal

import httpx
import pytest

from src.catalog.client import CatalogClientError, ProductsClient
from src.catalog.core.exceptions import ProductNotFoundError
from tests.fixtures.core import PNG_BYTES


@pytest.fixture
def products_client(client) -> ProductsClient:
    return ProductsClient(client)


class TestProductsClient:
    def test_create_and_get(self, products_client):
        created = products_client.create_product(
            "Laptop", price=Decimal("999.99"), quantity=10, description="Fast"
        )

        fetched = products_client.get_product(created.id)

        assert fetched.id == created.id
        assert fetched.name == "Laptop"
        assert fetched.description == "Fast"
        assert fetched.price == Decimal("999.99")
        assert fetched.quantity == 10

    def test_create_with_image(self, products_client, tmp_path):
        image = tmp_path / "photo.png"
        image.write_bytes(PNG_BYTES)

        created = products_client.create_product("Camera", price=1, image=image)

        assert created.image_url.startswith("/uploads/products/")
        assert created.image_url.endswith(".png")

    def test_list_products(self, products_client):
        products_client.create_product("A")
        products_client.create_product("B")

        assert [p.name for p in products_client.list_products()] == ["A", "B"]

    def test_update_product(self, products_client):
        created = products_client.create_product("Mouse", price=29.99, quantity=50)

        products_client.update_product(created.id, "Mouse", price=24.99, quantity=40)

        updated = products_client.get_product(created.id)
        assert updated.price == Decimal("24.99")
        assert updated.quantity == 40
        assert updated.updated_at is not None

    def test_delete_product(self, products_client):
        created = products_client.create_product("Mouse")

        products_client.delete_product(created.id)

        with pytest.raises(ProductNotFoundError):
            products_client.get_product(created.id)

    def test_missing_product_raises_not_found(self, products_client):
        with pytest.raises(ProductNotFoundError) as exc_info:
            products_client.delete_product(424242)

        assert exc_info.value.message == "Product with ID 424242 not found"

    def test_unsupported_image_raises_client_error(self, products_client, tmp_path):
        document = tmp_path / "notes.txt"
        document.write_text("hello")

        with pytest.raises(CatalogClientError) as exc_info:
            products_client.create_product("Laptop", image=document)

        assert exc_info.value.status_code == 400
        assert ".txt" in exc_info.value.message

    def test_non_json_error_body_uses_text(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(502, text="Bad Gateway"))
        client = ProductsClient(httpx.Client(transport=transport, base_url="http://api"))

        with pytest.raises(CatalogClientError) as exc_info:
            client.list_products()

        assert exc_info.value.status_code == 502
        assert exc_info.value.message == "Bad Gateway"

    def test_context_manager_closes_http_client(self):
        http = httpx.Client(base_url="http://api")

        with ProductsClient(http):
            pass

        assert http.is_closed
