"""FastAPI dependency implementations."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlmodel import Session
from starlette.datastructures import UploadFile

from src.catalog.api.http.app_data import ApplicationDependencies
from src.catalog.api.http.schemas.product import ProductWrite
from src.catalog.core.services import DbSessionService, ImageStorageService
from src.catalog.entities.service.product import Product

_FORM_CONTENT_TYPES = ("multipart/form-data", "application/x-www-form-urlencoded")


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_database_service(request: Request) -> DbSessionService:
    """Get the database session service instance."""
    return get_app_dependencies(request).database_service


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a database session that is closed once the response is sent."""
    with get_database_service(request).get_session() as session:
        yield session


def get_image_storage(request: Request) -> ImageStorageService:
    """Get the image storage service instance."""
    return get_app_dependencies(request).image_storage


@dataclass
class ProductPayload:
    """Parsed create/update request: the validated product and an optional image.

    ``product`` is fully validated before any file is written.
    """

    product: Product
    image: UploadFile | None = None


def _body_error(message: str) -> RequestValidationError:
    return RequestValidationError(
        [{"type": "value_error", "loc": ("body",), "msg": message, "input": None}]
    )


async def get_product_payload(request: Request) -> ProductPayload:
    """Read product fields from a multipart form or a JSON body."""
    content_type = request.headers.get("content-type", "").lower()
    image: UploadFile | None = None

    if content_type.startswith(_FORM_CONTENT_TYPES):
        form = await request.form()
        data = {}
        for key, value in form.multi_items():
            if key.lower() == "image":
                # Browsers send an empty part when no file was chosen
                if isinstance(value, UploadFile) and value.filename:
                    image = value
            elif isinstance(value, str):
                data[key] = value
    else:
        try:
            data = await request.json()
        except ValueError as e:
            raise _body_error("Request body must be JSON or multipart form data") from e
        if not isinstance(data, dict):
            raise _body_error("Request body must be a JSON object")

    try:
        product = ProductWrite.from_mapping(data).to_entity()
    except ValidationError as e:
        errors = [
            {**error, "loc": ("body", *error["loc"])}
            for error in e.errors(include_url=False, include_context=False)
        ]
        raise RequestValidationError(errors) from e

    return ProductPayload(product=product, image=image)
