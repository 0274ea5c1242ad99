"""Inventory — stock record for exactly one product.

Invariants:
    - quantity >= reserved_quantity >= 0 after every operation
    - available_quantity == quantity - reserved_quantity
    - A failed operation leaves the entity unchanged
    - New records start with reserved_quantity == 0
    - Inventory.reconstruct(...) is for trusted rows only (no validation)
"""

from datetime import datetime, timezone

from app.core.errors import (
    InsufficientStockError,
    InvalidInputError,
    InvalidQuantityError,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Inventory:
    """Inventory entity — product_id is a reference, not ownership."""

    __slots__ = (
        "_id", "_product_id", "_quantity", "_reserved_quantity",
        "_location", "_created_at", "_updated_at",
    )

    def __init__(self, id: str, product_id: str, quantity: int, location: str = ""):
        if not id:
            raise InvalidInputError("inventory id cannot be empty", field="id")
        if not product_id:
            raise InvalidInputError("product id cannot be empty", field="product_id")
        if quantity < 0:
            raise InvalidQuantityError()
        now = _now()
        self._id = id
        self._product_id = product_id
        self._quantity = quantity
        self._reserved_quantity = 0
        self._location = location
        self._created_at = now
        self._updated_at = now

    @classmethod
    def reconstruct(
        cls,
        id: str,
        product_id: str,
        quantity: int,
        reserved_quantity: int,
        location: str,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Inventory":
        """Rebuild from storage. Trusted input only — no validation runs."""
        inventory = cls.__new__(cls)
        inventory._id = id
        inventory._product_id = product_id
        inventory._quantity = quantity
        inventory._reserved_quantity = reserved_quantity
        inventory._location = location
        inventory._created_at = created_at
        inventory._updated_at = updated_at
        return inventory

    @property
    def id(self) -> str:
        return self._id

    @property
    def product_id(self) -> str:
        return self._product_id

    @property
    def quantity(self) -> int:
        return self._quantity

    @property
    def reserved_quantity(self) -> int:
        return self._reserved_quantity

    @property
    def available_quantity(self) -> int:
        return self._quantity - self._reserved_quantity

    @property
    def location(self) -> str:
        return self._location

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def reserve(self, quantity: int) -> None:
        if quantity <= 0:
            raise InvalidQuantityError("reserve quantity must be positive")
        if self.available_quantity < quantity:
            raise InsufficientStockError(quantity, self.available_quantity)
        self._reserved_quantity += quantity
        self._updated_at = _now()

    def release(self, quantity: int) -> None:
        if quantity <= 0:
            raise InvalidQuantityError("release quantity must be positive")
        if quantity > self._reserved_quantity:
            raise InvalidQuantityError("cannot release more than reserved quantity")
        self._reserved_quantity -= quantity
        self._updated_at = _now()

    def adjust_quantity(self, delta: int) -> None:
        """Add delta (may be negative) to quantity without dropping below reserved."""
        new_quantity = self._quantity + delta
        if new_quantity < 0:
            raise InvalidQuantityError()
        if new_quantity < self._reserved_quantity:
            raise InvalidQuantityError("cannot adjust quantity below reserved amount")
        self._quantity = new_quantity
        self._updated_at = _now()

    def update_location(self, location: str) -> None:
        self._location = location
        self._updated_at = _now()

    def __repr__(self) -> str:
        return (
            f"Inventory(product_id={self._product_id!r}, quantity={self._quantity}, "
            f"reserved={self._reserved_quantity})"
        )
