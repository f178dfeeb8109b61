"""Unit tests for the product request and response shapes."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from src.catalog.api.http.schemas.product import ProductRead, ProductWrite
from src.catalog.entities.service.product import Product


class TestProductWrite:
    def test_keys_are_matched_case_insensitively(self):
        fields = ProductWrite.from_mapping(
            {"Name": "Laptop", "DESCRIPTION": "Fast", "Price": "999.99", "quantity": "10"}
        )

        assert fields.name == "Laptop"
        assert fields.description == "Fast"
        assert fields.price == Decimal("999.99")
        assert fields.quantity == 10

    def test_blank_values_fall_back_to_defaults(self):
        fields = ProductWrite.from_mapping(
            {"Name": "Cable", "Description": "  ", "Price": "", "Quantity": " "}
        )

        assert fields.description == ""
        assert fields.price == Decimal("0")
        assert fields.quantity == 0

    def test_name_and_description_are_stripped(self):
        fields = ProductWrite.from_mapping({"name": "  Mouse ", "description": " wireless "})

        assert fields.name == "Mouse"
        assert fields.description == "wireless"

    @pytest.mark.parametrize(
        "data",
        [
            {},
            {"name": ""},
            {"name": "   "},
            {"name": "x" * 101},
            {"name": "ok", "description": "x" * 501},
            {"name": "ok", "quantity": "-1"},
            {"name": "ok", "quantity": "many"},
            {"name": "ok", "price": "cheap"},
            {"name": "ok", "price": "1e30"},
            {"name": "ok", "price": 1e30},
        ],
    )
    def test_invalid_input_is_rejected(self, data):
        with pytest.raises(ValidationError):
            ProductWrite.from_mapping(data)

    def test_unknown_keys_are_ignored(self):
        fields = ProductWrite.from_mapping({"name": "Laptop", "id": 42, "imageUrl": "x"})

        assert fields.name == "Laptop"

    def test_to_entity_carries_image_url(self):
        product = ProductWrite(name="Laptop", price=Decimal("1.005")).to_entity(
            "/uploads/products/a.png"
        )

        assert isinstance(product, Product)
        assert product.id is None
        assert product.price == Decimal("1.01")
        assert product.image_url == "/uploads/products/a.png"


class TestProductRead:
    def _product(self) -> Product:
        return Product(
            id=3,
            name="Mouse",
            description="Wireless mouse",
            price=Decimal("29.99"),
            quantity=50,
            image_url="/uploads/products/m.png",
            created_at=datetime(2024, 1, 2, 3, 4, 5, tzinfo=UTC),
        )

    def test_json_uses_camel_case_keys(self):
        body = ProductRead.from_entity(self._product()).model_dump(mode="json", by_alias=True)

        assert set(body) == {
            "id",
            "name",
            "description",
            "price",
            "quantity",
            "imageUrl",
            "createdAt",
            "updatedAt",
        }
        assert body["imageUrl"] == "/uploads/products/m.png"
        assert body["updatedAt"] is None

    def test_price_serializes_as_number(self):
        read = ProductRead.from_entity(self._product())

        assert read.model_dump(mode="json")["price"] == 29.99
        assert read.model_dump()["price"] == Decimal("29.99")

    def test_accepts_camel_case_input(self):
        read = ProductRead.model_validate(
            {
                "id": 1,
                "name": "Laptop",
                "description": "",
                "price": 999.99,
                "quantity": 10,
                "imageUrl": None,
                "createdAt": "2024-01-02T03:04:05Z",
                "updatedAt": None,
            }
        )

        assert read.created_at.year == 2024
        assert float(read.price) == 999.99
