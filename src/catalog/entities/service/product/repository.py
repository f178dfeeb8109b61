"""Product repository for data access operations."""

from loguru import logger
from sqlmodel import Session, func, select

from src.catalog.entities.core._base import utc_now
from src.catalog.entities.service.product.entity import Product
from src.catalog.entities.service.product.table import ProductTable

_MUTABLE_FIELDS = ("name", "description", "price", "quantity", "image_url")


class ProductRepository:
    """Data-access layer for products.

    The repository flushes so that generated values are visible; committing
    is left to the caller, which owns the session.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_all(self) -> list[Product]:
        statement = select(ProductTable).order_by(ProductTable.id)
        rows = self._session.exec(statement).all()
        return [Product.model_validate(row, from_attributes=True) for row in rows]

    def get(self, product_id: int) -> Product | None:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None
        return Product.model_validate(row, from_attributes=True)

    def exists(self, product_id: int) -> bool:
        return self._session.get(ProductTable, product_id) is not None

    def create(self, product: Product) -> Product:
        """Persist a new product; any id on the input is ignored."""
        row = ProductTable.model_validate(
            product.model_dump(exclude={"id", "updated_at"})
        )
        row.created_at = utc_now()
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        logger.debug("Created product {} ({})", row.id, row.name)
        return Product.model_validate(row, from_attributes=True)

    def update(self, product_id: int, product: Product) -> Product | None:
        """Replace every mutable field of the stored product.

        Returns None when no product with ``product_id`` exists.
        """
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return None

        for field_name in _MUTABLE_FIELDS:
            setattr(row, field_name, getattr(product, field_name))
        row.updated_at = utc_now()

        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        logger.debug("Updated product {}", product_id)
        return Product.model_validate(row, from_attributes=True)

    def delete(self, product_id: int) -> bool:
        row = self._session.get(ProductTable, product_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        logger.debug("Deleted product {}", product_id)
        return True

    def count(self) -> int:
        return self._session.exec(select(func.count()).select_from(ProductTable)).one()
