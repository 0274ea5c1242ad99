"""Product — catalogue entity with identity, name and price.

Invariants:
    - id and name are non-empty
    - update_name / update_price refresh updated_at
    - Product(...) validates; Product.reconstruct(...) is for rows already
      validated on the way in (trusted input only) and skips the checks
"""

from datetime import datetime, timezone

from app.core.errors import InvalidProductIdError, InvalidProductNameError
from app.core.price import Price


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Product:
    """Product entity — mutable through validated setters only."""

    __slots__ = ("_id", "_name", "_price", "_created_at", "_updated_at")

    def __init__(self, id: str, name: str, price: Price):
        if not id:
            raise InvalidProductIdError()
        if not name:
            raise InvalidProductNameError()
        now = _now()
        self._id = id
        self._name = name
        self._price = price
        self._created_at = now
        self._updated_at = now

    @classmethod
    def reconstruct(
        cls,
        id: str,
        name: str,
        price: Price,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Product":
        """Rebuild from storage. Trusted input only — no validation runs."""
        product = cls.__new__(cls)
        product._id = id
        product._name = name
        product._price = price
        product._created_at = created_at
        product._updated_at = updated_at
        return product

    @property
    def id(self) -> str:
        return self._id

    @property
    def name(self) -> str:
        return self._name

    @property
    def price(self) -> Price:
        return self._price

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def update_name(self, name: str) -> None:
        if not name:
            raise InvalidProductNameError()
        self._name = name
        self._updated_at = _now()

    def update_price(self, price: Price) -> None:
        self._price = price
        self._updated_at = _now()

    def __repr__(self) -> str:
        return f"Product(id={self._id!r}, name={self._name!r}, price='{self._price}')"
