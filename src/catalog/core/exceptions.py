"""Domain errors raised by the catalog and mapped to HTTP responses."""


class CatalogError(Exception):
    """Base class for errors that carry a client-facing message."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProductNotFoundError(CatalogError):
    status_code = 404

    def __init__(self, product_id: int) -> None:
        super().__init__(f"Product with ID {product_id} not found")
        self.product_id = product_id


class UnsupportedImageTypeError(CatalogError):
    status_code = 400

    def __init__(self, extension: str, allowed: list[str]) -> None:
        shown = extension or "(none)"
        super().__init__(
            f"Unsupported image type '{shown}'. Allowed types: {', '.join(allowed)}"
        )
        self.extension = extension
        self.allowed = allowed
