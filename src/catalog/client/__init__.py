"""Python client for the products API."""

from .api_client import CatalogClientError, ProductsClient

__all__ = ["CatalogClientError", "ProductsClient"]
