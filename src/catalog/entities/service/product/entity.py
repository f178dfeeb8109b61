"""Entity: Product."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from pydantic import Field, field_validator

from src.catalog.entities.core._base import Entity

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500
PRICE_MAX_DIGITS = 18

_CENTS = Decimal("0.01")


class Product(Entity):
    """Product entity representing an item in the catalog.

    This is the domain model that the repository hands out. Prices are
    normalised to two decimal places.
    """

    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH, description="Product name")
    description: str = Field(
        default="", max_length=DESCRIPTION_MAX_LENGTH, description="Free-form description"
    )
    price: Decimal = Field(default=Decimal("0.00"), description="Unit price")
    quantity: int = Field(default=0, ge=0, description="Units in stock")
    image_url: str | None = Field(
        default=None, description="Public URL of the uploaded product image"
    )

    @field_validator("price")
    @classmethod
    def _round_price(cls, value: Decimal) -> Decimal:
        try:
            return value.quantize(_CENTS, rounding=ROUND_HALF_UP)
        except InvalidOperation as e:
            raise ValueError("Price is out of range") from e

    def __eq__(self, other: Any) -> bool:
        """Compare products by business attributes, ignoring timestamps."""
        if not isinstance(other, Product):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.description == other.description
            and self.price == other.price
            and self.quantity == other.quantity
            and self.image_url == other.image_url
        )

    def __hash__(self) -> int:
        """Hash based on business attributes, ignoring timestamps."""
        return hash((
            self.id,
            self.name,
            self.description,
            self.price,
            self.quantity,
            self.image_url,
        ))
