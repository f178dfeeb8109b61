"""Schema creation and sample data for the catalog database."""

from decimal import Decimal

from loguru import logger
from sqlmodel import SQLModel

from src.catalog.core.services.database.db_session import DbSessionService
from src.catalog.entities.service.product import Product, ProductRepository

SAMPLE_PRODUCTS = (
    Product(
        name="Laptop",
        description="High-performance laptop",
        price=Decimal("999.99"),
        quantity=10,
    ),
    Product(
        name="Mouse",
        description="Wireless mouse",
        price=Decimal("29.99"),
        quantity=50,
    ),
)


class DbManageService:
    def __init__(self, db_session_service: DbSessionService):
        self._db = db_session_service

    def create_all(self) -> None:
        """Create all database tables."""
        from src.catalog.entities.service.product import ProductTable  # noqa: F401

        SQLModel.metadata.create_all(self._db.engine)
        logger.info("Database initialized with tables.")

    def seed_sample_data(self) -> int:
        """Insert the sample products when the table is empty.

        Returns the number of rows inserted.
        """
        with self._db.session_scope() as session:
            repository = ProductRepository(session)
            if repository.count() > 0:
                logger.debug("Products table not empty; skipping sample data")
                return 0
            for product in SAMPLE_PRODUCTS:
                repository.create(product)

        logger.info("Seeded {} sample products", len(SAMPLE_PRODUCTS))
        return len(SAMPLE_PRODUCTS)
