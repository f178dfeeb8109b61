"""Product API router with CRUD operations."""

from fastapi import APIRouter, Depends, Request, Response, status
from loguru import logger
from sqlmodel import Session

from src.catalog.api.http.deps import (
    ProductPayload,
    get_db_session,
    get_image_storage,
    get_product_payload,
)
from src.catalog.api.http.schemas.product import ProductRead, ProductWrite
from src.catalog.core.exceptions import ProductNotFoundError
from src.catalog.core.services import ImageStorageService
from src.catalog.entities.service.product import ProductRepository

router = APIRouter()

# Both body encodings are parsed by get_product_payload, so document them here
_PRODUCT_BODY = {
    "requestBody": {
        "content": {
            "application/json": {
                "schema": ProductWrite.model_json_schema(),
            },
            "multipart/form-data": {
                "schema": {
                    "type": "object",
                    "properties": {
                        "name": {"type": "string"},
                        "description": {"type": "string"},
                        "price": {"type": "number"},
                        "quantity": {"type": "integer"},
                        "image": {"type": "string", "format": "binary"},
                    },
                    "required": ["name"],
                },
            },
        },
        "required": True,
    }
}

_NOT_FOUND = {404: {"description": "Product not found"}}
_BAD_IMAGE = {400: {"description": "Unsupported image type"}}


@router.get("", response_model=list[ProductRead])
def list_products(
    session: Session = Depends(get_db_session),
) -> list[ProductRead]:
    """List all products."""
    repository = ProductRepository(session)
    return [ProductRead.from_entity(product) for product in repository.list_all()]


@router.get("/{product_id}", response_model=ProductRead, responses=_NOT_FOUND)
def get_product(
    product_id: int,
    session: Session = Depends(get_db_session),
) -> ProductRead:
    """Get a product by ID."""
    repository = ProductRepository(session)
    product = repository.get(product_id)
    if product is None:
        raise ProductNotFoundError(product_id)
    return ProductRead.from_entity(product)


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    responses=_BAD_IMAGE,
    openapi_extra=_PRODUCT_BODY,
)
def create_product(
    request: Request,
    response: Response,
    payload: ProductPayload = Depends(get_product_payload),
    session: Session = Depends(get_db_session),
    storage: ImageStorageService = Depends(get_image_storage),
) -> ProductRead:
    """Create a new product, storing the uploaded image if one was sent."""
    product = payload.product
    if payload.image is not None:
        product.image_url = storage.save(payload.image.filename, payload.image.file)

    repository = ProductRepository(session)
    created_product = repository.create(product)
    session.commit()
    logger.info("Created product {}", created_product.id)

    response.headers["Location"] = str(
        request.url_for("get_product", product_id=created_product.id)
    )
    return ProductRead.from_entity(created_product)


@router.put(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**_NOT_FOUND, **_BAD_IMAGE},
    openapi_extra=_PRODUCT_BODY,
)
def update_product(
    product_id: int,
    payload: ProductPayload = Depends(get_product_payload),
    session: Session = Depends(get_db_session),
    storage: ImageStorageService = Depends(get_image_storage),
) -> Response:
    """Replace a product's fields; without a new image the current one is kept."""
    repository = ProductRepository(session)
    existing = repository.get(product_id)
    if existing is None:
        raise ProductNotFoundError(product_id)

    product = payload.product
    product.image_url = existing.image_url
    if payload.image is not None:
        product.image_url = storage.save(payload.image.filename, payload.image.file)
        # Not rolled back if the update below fails
        storage.delete(existing.image_url)

    updated_product = repository.update(product_id, product)
    if updated_product is None:
        raise ProductNotFoundError(product_id)
    session.commit()
    logger.info("Updated product {}", product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses=_NOT_FOUND,
)
def delete_product(
    product_id: int,
    session: Session = Depends(get_db_session),
    storage: ImageStorageService = Depends(get_image_storage),
) -> Response:
    """Delete a product and its stored image."""
    repository = ProductRepository(session)
    existing = repository.get(product_id)
    if existing is None or not repository.delete(product_id):
        raise ProductNotFoundError(product_id)
    session.commit()
    logger.info("Deleted product {}", product_id)

    storage.delete(existing.image_url)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
