from __future__ import annotations

from collections.abc import Callable, Generator
from decimal import Decimal
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from src.catalog.runtime.config.config_data import (
    AppConfig,
    ConfigData,
    DatabaseConfig,
    LoggingConfig,
    UploadConfig,
)

# Smallest valid PNG; the service only looks at the extension
PNG_BYTES = (
    b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"
    b"\x08\x06\x00\x00\x00\x1f\x15\xc4\x89\x00\x00\x00\rIDATx\x9cc\xf8\x0f"
    b"\x00\x00\x01\x01\x00\x05\x18\xd8N\x00\x00\x00\x00IEND\xaeB`\x82"
)

__all__ = [
    "PNG_BYTES",
    "session",
    "test_config",
    "upload_config",
    "app",
    "client",
    "image_file",
    "laptop_form",
]


@pytest.fixture
def session() -> Generator[Session]:
    """Create a fresh in-memory database session for testing."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # Import models to register them with the metadata
    from src.catalog.entities.service.product import ProductTable  # noqa: F401

    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        try:
            yield session
        finally:
            session.rollback()
            session.close()
            engine.dispose()


@pytest.fixture
def upload_config(tmp_path: Path) -> UploadConfig:
    return UploadConfig(directory=str(tmp_path / "uploads"))


@pytest.fixture
def test_config(tmp_path: Path, upload_config: UploadConfig) -> ConfigData:
    """Configuration pointing at a per-test SQLite file and upload directory."""
    return ConfigData(
        app=AppConfig(environment="test"),
        database=DatabaseConfig(
            url=f"sqlite:///{tmp_path / 'catalog.db'}",
            seed_sample_data=False,
        ),
        uploads=upload_config,
        logging=LoggingConfig(level="DEBUG", file=None),
    )


@pytest.fixture
def app(test_config: ConfigData) -> FastAPI:
    from src.catalog.api.http.app import create_app

    return create_app(test_config)


@pytest.fixture
def client(app: FastAPI) -> Generator[TestClient]:
    """Test client with the application lifespan running."""
    with TestClient(app) as client:
        yield client


@pytest.fixture
def image_file() -> Callable[..., tuple[str, bytes, str]]:
    """Build a multipart file tuple: image_file("photo.png")."""

    def _make(filename: str = "photo.png", content: bytes = PNG_BYTES,
              content_type: str = "image/png") -> tuple[str, bytes, str]:
        return (filename, content, content_type)

    return _make


@pytest.fixture
def laptop_form() -> dict[str, str]:
    return {
        "Name": "Laptop",
        "Description": "High-performance laptop",
        "Price": str(Decimal("999.99")),
        "Quantity": "10",
    }
