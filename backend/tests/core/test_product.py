"""Product — verifies entity construction, reconstruction, and validated setters.

Tests:
    - Constructor rejects empty id / name and stamps both timestamps
    - reconstruct() keeps stored values verbatim (no validation)
    - update_name validates; update_price always succeeds; both bump updated_at
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.core.errors import InvalidProductIdError, InvalidProductNameError
from app.core.price import Price
from app.core.product import Product


def _product() -> Product:
    return Product("p1", "Widget", Price("10.00", "USD"))


def test_new_product_has_fields_and_equal_timestamps():
    product = _product()
    assert product.id == "p1"
    assert product.name == "Widget"
    assert str(product.price) == "10.00 USD"
    assert product.created_at == product.updated_at
    assert product.created_at.tzinfo is not None


def test_empty_id_rejected():
    with pytest.raises(InvalidProductIdError):
        Product("", "Widget", Price(1, "USD"))


def test_empty_name_rejected():
    with pytest.raises(InvalidProductNameError):
        Product("p1", "", Price(1, "USD"))


def test_reconstruct_keeps_stored_timestamps():
    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    updated = created + timedelta(days=3)
    product = Product.reconstruct("p1", "Widget", Price(1, "USD"), created, updated)
    assert product.created_at == created
    assert product.updated_at == updated


def test_update_name_changes_name_and_bumps_updated_at():
    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    product = Product.reconstruct("p1", "Widget", Price(1, "USD"), created, created)
    product.update_name("Gadget")
    assert product.name == "Gadget"
    assert product.updated_at > created
    assert product.created_at == created


def test_update_name_rejects_empty_and_keeps_old_name():
    product = _product()
    with pytest.raises(InvalidProductNameError):
        product.update_name("")
    assert product.name == "Widget"


def test_update_price_always_succeeds():
    created = datetime(2024, 1, 1, tzinfo=timezone.utc)
    product = Product.reconstruct("p1", "Widget", Price(1, "USD"), created, created)
    product.update_price(Price(0, "EUR"))
    assert product.price.equals(Price(0, "EUR"))
    assert product.updated_at > created
