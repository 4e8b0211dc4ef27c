"""FastAPI dependencies for authentication and services."""

from typing import Annotated, TypeVar

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from src.config import get_settings
from src.database import get_db
from src.exceptions import AuthError, ForbiddenError, ValidationError, format_validation_errors
from src.schemas.auth import TokenClaims
from src.services.auth import decode_access_token
from src.services.catalog_service import CatalogService
from src.services.image_storage import ImageStorage

ModelT = TypeVar("ModelT", bound=BaseModel)

# auto_error is off so a missing header is reported as 401 with our error body
security = HTTPBearer(auto_error=False)


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> TokenClaims:
    """Get the claims of the bearer token on the request.

    Tokens are self-contained: validity depends only on signature and expiry.
    """
    if credentials is None:
        raise AuthError("Access denied")
    return decode_access_token(credentials.credentials)


def require_admin(
    claims: Annotated[TokenClaims, Depends(get_current_claims)],
) -> TokenClaims:
    """Allow the request only for administrator tokens."""
    if not claims.is_admin:
        raise ForbiddenError("Admin access required")
    return claims


def admin_json_body(schema: type[ModelT]):
    """Build a dependency that parses a JSON body only after the admin check.

    Non-admin callers get 403 whatever the body contains; body parameters
    declared on the route itself are decoded before any dependency runs.
    """

    async def parse_body(
        request: Request,
        _admin: Annotated[TokenClaims, Depends(require_admin)],
    ) -> ModelT:
        try:
            payload = await request.json()
        except ValueError as e:
            raise ValidationError("Invalid JSON body") from e
        try:
            return schema.model_validate(payload)
        except PydanticValidationError as e:
            raise ValidationError(format_validation_errors(e.errors())) from e

    return parse_body


def json_body_openapi(schema: type[BaseModel]) -> dict:
    """OpenAPI request body for routes that parse JSON in a dependency."""
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": schema.model_json_schema()}},
        }
    }


def get_image_storage() -> ImageStorage:
    """Get image storage for the configured upload directory."""
    settings = get_settings()
    return ImageStorage(settings.upload_dir, settings.max_upload_bytes)


def get_catalog_service(
    db: Annotated[Session, Depends(get_db)],
    image_storage: Annotated[ImageStorage, Depends(get_image_storage)],
) -> CatalogService:
    """Get catalog service with dependencies."""
    return CatalogService(db, image_storage, get_settings().public_base_url)
