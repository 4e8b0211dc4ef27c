"""Catalog service for product and category management."""

import logging
from decimal import Decimal

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from src.exceptions import ConflictError, DuplicateError, StoreError, ValidationError
from src.models.category import Category
from src.models.product import Product
from src.schemas.product import ProductResponse
from src.services.image_storage import ImageStorage

logger = logging.getLogger(__name__)


class CatalogService:
    """Service for catalog CRUD operations."""

    def __init__(self, db: Session, image_storage: ImageStorage, base_url: str):
        self.db = db
        self.image_storage = image_storage
        self.base_url = base_url.rstrip("/")

    # --- Products ---

    def list_products(self) -> list[ProductResponse]:
        """Get all products with their category names, newest first."""
        rows = (
            self.db.query(Product, Category.name)
            .outerjoin(Category, Category.id == Product.category_id)
            .order_by(Product.created_at.desc())
            .all()
        )
        return [self._to_response(product, category_name) for product, category_name in rows]

    def get_product(self, product_id: str) -> ProductResponse | None:
        """Get a single product with its category name."""
        row = (
            self.db.query(Product, Category.name)
            .outerjoin(Category, Category.id == Product.category_id)
            .filter(Product.id == product_id)
            .first()
        )
        if row is None:
            return None
        product, category_name = row
        return self._to_response(product, category_name)

    def create_product(
        self,
        name: str,
        category_id: str,
        description: str | None,
        price: Decimal,
        image_url: str | None = None,
    ) -> ProductResponse:
        """Create a product and return it as clients see it."""
        product = Product(
            name=name,
            category_id=category_id,
            description=description,
            price=price,
            image_url=image_url,
        )
        self.db.add(product)
        self._commit(f"create product {name!r}")
        logger.info(f"Created product {product.id} in category {category_id}")

        return self.get_product(product.id)

    def update_product(
        self,
        product_id: str,
        name: str,
        category_id: str,
        description: str | None,
        price: Decimal,
        image_url: str | None = None,
    ) -> bool:
        """Overwrite a product's fields.

        The image is replaced only when a new one is supplied. Unknown ids are
        a no-op; returns whether a product was updated.
        """
        product = self.db.query(Product).filter(Product.id == product_id).first()
        if product is None:
            logger.info(f"Update of unknown product {product_id} ignored")
            return False

        replaced_image = None
        product.name = name
        product.category_id = category_id
        product.description = description
        product.price = price
        if image_url is not None:
            replaced_image = product.image_url
            product.image_url = image_url

        self._commit(f"update product {product_id}")
        logger.info(f"Updated product {product_id}")

        if replaced_image and replaced_image != image_url:
            self.image_storage.delete(replaced_image)
        return True

    def delete_product(self, product_id: str) -> None:
        """Delete a product and its image. Unknown ids are a no-op."""
        product = self.db.query(Product).filter(Product.id == product_id).first()
        if product is None:
            return

        image_url = product.image_url
        self.db.delete(product)
        self._commit(f"delete product {product_id}")
        logger.info(f"Deleted product {product_id}")

        self.image_storage.delete(image_url)

    # --- Categories ---

    def list_categories(self) -> list[Category]:
        """Get all categories ordered by name."""
        return self.db.query(Category).order_by(Category.name).all()

    def create_category(self, name: str, description: str | None = None) -> str:
        """Create a category and return its id."""
        name = self._validate_category_name(name)
        self._ensure_name_available(name)

        category = Category(name=name, description=description)
        self.db.add(category)
        self._commit(f"create category {name!r}", duplicate_detail="Category already exists")
        logger.info(f"Created category {category.id} ({name})")
        return category.id

    def update_category(self, category_id: str, name: str, description: str | None) -> None:
        """Overwrite a category's name and description. Unknown ids are a no-op."""
        name = self._validate_category_name(name)

        category = self.db.query(Category).filter(Category.id == category_id).first()
        if category is None:
            logger.info(f"Update of unknown category {category_id} ignored")
            return

        self._ensure_name_available(name, exclude_id=category_id)
        category.name = name
        category.description = description
        self._commit(
            f"update category {category_id}", duplicate_detail="Category already exists"
        )
        logger.info(f"Updated category {category_id}")

    def delete_category(self, category_id: str) -> None:
        """Delete a category that no product references."""
        in_use = (
            self.db.query(Product.id).filter(Product.category_id == category_id).first()
            is not None
        )
        if in_use:
            raise ConflictError("Cannot delete category that has products")

        self.db.query(Category).filter(Category.id == category_id).delete()
        self._commit(f"delete category {category_id}")
        logger.info(f"Deleted category {category_id}")

    # --- Helpers ---

    def _to_response(self, product: Product, category_name: str | None) -> ProductResponse:
        return ProductResponse(
            id=product.id,
            name=product.name,
            category_id=product.category_id,
            category_name=category_name,
            description=product.description,
            price=product.price,
            image_url=self.absolute_image_url(product.image_url),
            created_at=product.created_at,
            updated_at=product.updated_at,
        )

    def absolute_image_url(self, image_url: str | None) -> str | None:
        """Turn a stored "/uploads/..." reference into a URL clients can fetch."""
        if not image_url:
            return None
        return f"{self.base_url}{image_url}"

    @staticmethod
    def _validate_category_name(name: str) -> str:
        name = (name or "").strip()
        if not name:
            raise ValidationError("Category name is required")
        return name

    def _ensure_name_available(self, name: str, exclude_id: str | None = None) -> None:
        query = self.db.query(Category.id).filter(Category.name == name)
        if exclude_id is not None:
            query = query.filter(Category.id != exclude_id)
        if query.first() is not None:
            raise DuplicateError("Category already exists")

    def _commit(self, action: str, duplicate_detail: str | None = None) -> None:
        """Commit the session, translating store failures into domain errors."""
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            if duplicate_detail is not None:
                raise DuplicateError(duplicate_detail) from e
            logger.error(f"Failed to {action}: {e}")
            raise StoreError() from e
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise StoreError() from e
