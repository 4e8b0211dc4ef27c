"""Product API endpoints."""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, UploadFile

from src.api.dependencies import (
    get_catalog_service,
    get_current_claims,
    get_image_storage,
    require_admin,
)
from src.exceptions import StoreError
from src.schemas.auth import TokenClaims
from src.schemas.base import MessageResponse
from src.schemas.product import ProductCreateResponse, ProductResponse
from src.services.catalog_service import CatalogService
from src.services.image_storage import ImageStorage

router = APIRouter(prefix="/api/products", tags=["products"])


async def store_image(image_storage: ImageStorage, image: UploadFile | None) -> str | None:
    """Persist the optional image of a product form; returns its reference."""
    if image is None or not image.filename:
        return None
    return await image_storage.save(image)


@router.get("", response_model=list[ProductResponse])
def get_products(
    _claims: Annotated[TokenClaims, Depends(get_current_claims)],
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Get all products, newest first."""
    return catalog.list_products()


@router.post("", response_model=ProductCreateResponse)
async def create_product(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
    image_storage: Annotated[ImageStorage, Depends(get_image_storage)],
    name: Annotated[str, Form(min_length=1, max_length=100)],
    category_id: Annotated[str, Form(alias="categoryId", min_length=1)],
    price: Annotated[Decimal, Form(ge=0, max_digits=10, decimal_places=2)],
    description: Annotated[str, Form()] = "",
    image: Annotated[UploadFile | None, File(description="Product image")] = None,
):
    """Create a product, optionally with an image.

    Note: This endpoint must remain async because UploadFile.read() is async.
    """
    image_url = await store_image(image_storage, image)

    try:
        product = catalog.create_product(name, category_id, description, price, image_url)
    except StoreError:
        image_storage.delete(image_url)
        raise

    return ProductCreateResponse(message="Product added successfully", product=product)


@router.put("/{product_id}", response_model=MessageResponse)
async def update_product(
    product_id: str,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
    image_storage: Annotated[ImageStorage, Depends(get_image_storage)],
    name: Annotated[str, Form(min_length=1, max_length=100)],
    category_id: Annotated[str, Form(alias="categoryId", min_length=1)],
    price: Annotated[Decimal, Form(ge=0, max_digits=10, decimal_places=2)],
    description: Annotated[str, Form()] = "",
    image: Annotated[UploadFile | None, File(description="Replacement image")] = None,
):
    """Overwrite a product. The stored image changes only when a new one is sent."""
    image_url = await store_image(image_storage, image)

    try:
        updated = catalog.update_product(
            product_id, name, category_id, description, price, image_url
        )
    except StoreError:
        image_storage.delete(image_url)
        raise

    if not updated:
        image_storage.delete(image_url)

    return MessageResponse(message="Product updated successfully")


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: str,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Delete a product. Deleting an unknown id succeeds."""
    catalog.delete_product(product_id)
    return MessageResponse(message="Product deleted successfully")
