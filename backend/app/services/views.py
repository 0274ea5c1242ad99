"""Use-case Views — read-only results handed from services to the API layer.

Invariants:
    - Views are frozen snapshots; mutating an entity later never changes a view
    - Prices travel as Decimal amount + currency string (never float)
    - A product without stock data reports has_inventory=False and zero quantities
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from app.core.inventory import Inventory
from app.core.product import Product
from app.core.repository_protocols import InventorySnapshot, ProductSummary


@dataclass(frozen=True)
class ProductView:
    id: str
    name: str
    price_amount: Decimal
    price_currency: str
    created_at: datetime
    updated_at: datetime
    has_inventory: bool = False
    stock_quantity: int = 0
    available_quantity: int = 0

    @classmethod
    def from_entity(
        cls, product: Product, stock: InventorySnapshot | None = None,
    ) -> "ProductView":
        return cls(
            id=product.id,
            name=product.name,
            price_amount=product.price.amount,
            price_currency=product.price.currency,
            created_at=product.created_at,
            updated_at=product.updated_at,
            has_inventory=stock is not None,
            stock_quantity=stock.quantity if stock else 0,
            available_quantity=stock.available_quantity if stock else 0,
        )


@dataclass(frozen=True)
class InventoryView:
    id: str
    product_id: str
    product_name: str
    product_price: Decimal
    product_currency: str
    quantity: int
    reserved_quantity: int
    available_quantity: int
    location: str
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(
        cls, inventory: Inventory, product: ProductSummary,
    ) -> "InventoryView":
        return cls(
            id=inventory.id,
            product_id=inventory.product_id,
            product_name=product.name,
            product_price=product.price_amount,
            product_currency=product.price_currency,
            quantity=inventory.quantity,
            reserved_quantity=inventory.reserved_quantity,
            available_quantity=inventory.available_quantity,
            location=inventory.location,
            created_at=inventory.created_at,
            updated_at=inventory.updated_at,
        )
