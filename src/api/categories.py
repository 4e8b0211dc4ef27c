"""Category API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import (
    admin_json_body,
    get_catalog_service,
    get_current_claims,
    json_body_openapi,
    require_admin,
)
from src.schemas.auth import TokenClaims
from src.schemas.base import MessageResponse
from src.schemas.category import (
    CategoryCreate,
    CategoryCreateResponse,
    CategoryResponse,
    CategoryUpdate,
)
from src.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
def get_categories(
    _claims: Annotated[TokenClaims, Depends(get_current_claims)],
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Get all categories ordered by name."""
    return catalog.list_categories()


@router.post(
    "", response_model=CategoryCreateResponse, openapi_extra=json_body_openapi(CategoryCreate)
)
def create_category(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    category_data: Annotated[CategoryCreate, Depends(admin_json_body(CategoryCreate))],
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Create a new category."""
    category_id = catalog.create_category(category_data.name, category_data.description)
    return CategoryCreateResponse(message="Category added successfully", category_id=category_id)


@router.put(
    "/{category_id}",
    response_model=MessageResponse,
    openapi_extra=json_body_openapi(CategoryUpdate),
)
def update_category(
    category_id: str,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    category_data: Annotated[CategoryUpdate, Depends(admin_json_body(CategoryUpdate))],
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Replace a category's name and description."""
    catalog.update_category(category_id, category_data.name, category_data.description)
    return MessageResponse(message="Category updated successfully")


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: str,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
):
    """Delete a category. Fails while products still reference it."""
    catalog.delete_category(category_id)
    return MessageResponse(message="Category deleted successfully")
