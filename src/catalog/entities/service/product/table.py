"""Product database table model."""

from decimal import Decimal

from sqlmodel import Field

from src.catalog.entities.core._base import EntityTable
from src.catalog.entities.service.product.entity import (
    DESCRIPTION_MAX_LENGTH,
    NAME_MAX_LENGTH,
    PRICE_MAX_DIGITS,
)


class ProductTable(EntityTable, table=True):
    """Database persistence model for products.

    This represents how the Product entity is stored in the database.
    It's separate from the domain entity to maintain clean architecture
    while keeping related code together.
    """

    __tablename__ = "products"

    name: str = Field(max_length=NAME_MAX_LENGTH, nullable=False)
    description: str = Field(default="", max_length=DESCRIPTION_MAX_LENGTH)
    price: Decimal = Field(default=Decimal("0.00"), max_digits=PRICE_MAX_DIGITS, decimal_places=2)
    quantity: int = Field(default=0, nullable=False)
    image_url: str | None = Field(default=None, max_length=255)
