"""Wire shapes for the products resource."""

from collections.abc import Mapping
from datetime import datetime
from decimal import Decimal
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from src.catalog.entities.service.product.entity import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PRICE_MAX_DIGITS,
    Product,
)

# Prices travel as JSON numbers, not the string pydantic uses for Decimal
JsonPrice = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


class ProductRead(BaseModel):
    """Product as returned by the API."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )

    id: int
    name: str
    description: str
    price: JsonPrice
    quantity: int
    image_url: str | None = None
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, product: Product) -> "ProductRead":
        return cls.model_validate(product, from_attributes=True)


class ProductWrite(BaseModel):
    """Fields accepted by create and update, from JSON or a multipart form."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    price: Decimal = Field(default=Decimal("0"), max_digits=PRICE_MAX_DIGITS)
    quantity: int = Field(default=0, ge=0)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ProductWrite":
        """Validate ``data`` matching field names case-insensitively.

        Browser forms post ``Name``/``Price``; JSON clients post ``name``.
        Blank form values fall back to the field default.
        """
        normalized = {
            key.lower(): value
            for key, value in data.items()
            if not (isinstance(value, str) and value.strip() == "" and key.lower() != "name")
        }
        if isinstance(normalized.get("name"), str):
            normalized["name"] = normalized["name"].strip()
        if isinstance(normalized.get("description"), str):
            normalized["description"] = normalized["description"].strip()
        return cls.model_validate(normalized)

    def to_entity(self, image_url: str | None = None) -> Product:
        return Product(
            name=self.name,
            description=self.description,
            price=self.price,
            quantity=self.quantity,
            image_url=image_url,
        )
