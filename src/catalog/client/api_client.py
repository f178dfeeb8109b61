"""HTTP client for the products API."""

from __future__ import annotations

from decimal import Decimal
from pathlib import Path
from typing import Any

import httpx
from loguru import logger

from src.catalog.api.http.schemas.product import ProductRead
from src.catalog.core.exceptions import ProductNotFoundError


class CatalogClientError(Exception):
    """Raised when the API answers with an unexpected status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class ProductsClient:
    """Thin wrapper over ``/api/products``.

    Accepts any ``httpx.Client``; the FastAPI ``TestClient`` works too.
    """

    def __init__(self, http: httpx.Client, prefix: str = "/api/products") -> None:
        self._http = http
        self._prefix = prefix.rstrip("/")

    @classmethod
    def connect(cls, base_url: str, timeout: float = 10.0) -> ProductsClient:
        return cls(httpx.Client(base_url=base_url, timeout=timeout))

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> ProductsClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _check(self, response: httpx.Response, product_id: int | None = None) -> None:
        if response.is_success:
            return
        if response.status_code == 404 and product_id is not None:
            raise ProductNotFoundError(product_id)
        try:
            message = response.json().get("message") or response.text
        except ValueError:
            message = response.text
        logger.debug("API error {} for {}", response.status_code, response.request.url)
        raise CatalogClientError(response.status_code, message)

    @staticmethod
    def _form(
        name: str, description: str, price: Decimal | float, quantity: int
    ) -> dict[str, str]:
        return {
            "name": name,
            "description": description,
            "price": str(price),
            "quantity": str(quantity),
        }

    @staticmethod
    def _files(image: Path | None) -> dict[str, Any] | None:
        if image is None:
            return None
        return {"image": (image.name, image.read_bytes())}

    def list_products(self) -> list[ProductRead]:
        response = self._http.get(self._prefix)
        self._check(response)
        return [
            ProductRead.model_validate(item)
            for item in response.json(parse_float=Decimal)
        ]

    def get_product(self, product_id: int) -> ProductRead:
        response = self._http.get(f"{self._prefix}/{product_id}")
        self._check(response, product_id)
        return ProductRead.model_validate(response.json(parse_float=Decimal))

    def create_product(
        self,
        name: str,
        price: Decimal | float = 0,
        quantity: int = 0,
        description: str = "",
        image: Path | None = None,
    ) -> ProductRead:
        response = self._http.post(
            self._prefix,
            data=self._form(name, description, price, quantity),
            files=self._files(image),
        )
        self._check(response)
        return ProductRead.model_validate(response.json(parse_float=Decimal))

    def update_product(
        self,
        product_id: int,
        name: str,
        price: Decimal | float = 0,
        quantity: int = 0,
        description: str = "",
        image: Path | None = None,
    ) -> None:
        response = self._http.put(
            f"{self._prefix}/{product_id}",
            data=self._form(name, description, price, quantity),
            files=self._files(image),
        )
        self._check(response, product_id)

    def delete_product(self, product_id: int) -> None:
        response = self._http.delete(f"{self._prefix}/{product_id}")
        self._check(response, product_id)
