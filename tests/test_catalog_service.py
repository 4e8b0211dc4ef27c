"""Catalog service tests against the database session directly."""

from decimal import Decimal

import pytest

from src.exceptions import ConflictError, DuplicateError, ValidationError
from src.models.category import Category
from src.services.catalog_service import CatalogService
from src.services.image_storage import ImageStorage


@pytest.fixture
def catalog(db, tmp_path):
    storage = ImageStorage(tmp_path, max_bytes=1024)
    return CatalogService(db, storage, "https://shop.example.com/")


def test_create_category_strips_name(catalog, db):
    """Test names are stored without surrounding whitespace."""
    category_id = catalog.create_category("  Garden  ", "Outdoor")

    category = db.query(Category).filter(Category.id == category_id).one()
    assert category.name == "Garden"
    assert category.description == "Outdoor"


def test_create_category_rejects_blank_name(catalog):
    with pytest.raises(ValidationError):
        catalog.create_category("   ")


def test_create_category_duplicate_detected_by_store(catalog, monkeypatch):
    """Test a duplicate that slips past the pre-check still maps to DuplicateError."""
    catalog.create_category("Garden")
    monkeypatch.setattr(catalog, "_ensure_name_available", lambda *args, **kwargs: None)

    with pytest.raises(DuplicateError):
        catalog.create_category("Garden")

    # The session is usable again after the failed commit
    assert [category.name for category in catalog.list_categories()] == ["Garden"]


def test_absolute_image_url(catalog):
    """Test stored references are prefixed with the public base URL."""
    assert (
        catalog.absolute_image_url("/uploads/product-1-2.jpg")
        == "https://shop.example.com/uploads/product-1-2.jpg"
    )
    assert catalog.absolute_image_url(None) is None


def test_product_lifecycle(catalog):
    """Test create, update and delete through the service."""
    category_id = catalog.create_category("Garden")
    product = catalog.create_product("Hose", category_id, "25m", Decimal("24.50"))

    assert product.category_name == "Garden"
    assert product.price == Decimal("24.50")

    assert catalog.update_product(product.id, "Hose XL", category_id, None, Decimal("30"))
    [updated] = catalog.list_products()
    assert updated.name == "Hose XL"
    assert updated.description is None
    assert updated.price == Decimal("30.00")

    with pytest.raises(ConflictError):
        catalog.delete_category(category_id)

    catalog.delete_product(product.id)
    catalog.delete_product(product.id)
    catalog.delete_category(category_id)

    assert catalog.list_products() == []
    assert catalog.list_categories() == []


def test_update_unknown_product_reports_nothing_updated(catalog):
    assert catalog.update_product("missing", "Name", "cat", None, Decimal("1")) is False


def test_update_unknown_category_is_noop(catalog):
    catalog.update_category("missing", "Name", None)
    assert catalog.list_categories() == []
