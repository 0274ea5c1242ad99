"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Query repositories return None for a missing row; they never raise "not found"
    - Command and query sides are split per aggregate
    - Cross-module lookups are narrow: each module sees only what it consumes

Design Decisions:
    - Protocol over ABC: structural subtyping, fakes in tests need no inheritance
    - Async in Protocol: implementations do IO; entities stay synchronous
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Protocol

from app.core.inventory import Inventory
from app.core.product import Product


# ─── Persistence ─────────────────────────────────────────────────

class ProductCommandRepository(Protocol):
    """Write side for products — implemented by shell."""
    async def create(self, product: Product) -> None: ...
    async def update(self, product: Product) -> None: ...
    async def delete(self, product_id: str) -> None: ...


class ProductQueryRepository(Protocol):
    """Read side for products — implemented by shell."""
    async def get_by_id(self, product_id: str) -> Product | None: ...
    async def list_products(self, limit: int, offset: int) -> list[Product]: ...


class InventoryCommandRepository(Protocol):
    """Write side for inventory — implemented by shell.

    adjust_stock / reserve_stock / release_stock are single guarded
    increments; they return False when the guard rejected the change.
    """
    async def create(self, inventory: Inventory) -> None: ...
    async def update(self, inventory: Inventory) -> None: ...
    async def delete(self, product_id: str) -> None: ...
    async def adjust_stock(self, product_id: str, delta: int) -> bool: ...
    async def reserve_stock(self, product_id: str, quantity: int) -> bool: ...
    async def release_stock(self, product_id: str, quantity: int) -> bool: ...


class InventoryQueryRepository(Protocol):
    """Read side for inventory — implemented by shell."""
    async def get_by_product_id(self, product_id: str) -> Inventory | None: ...


# ─── Cross-module lookups ────────────────────────────────────────

@dataclass(frozen=True)
class ProductSummary:
    """What the inventory module needs to know about a product."""
    id: str
    name: str
    price_amount: Decimal
    price_currency: str


@dataclass(frozen=True)
class InventorySnapshot:
    """What the product module needs to know about stock."""
    quantity: int
    available_quantity: int


class ProductLookup(Protocol):
    """Consumed by inventory. Raises ProductNotFoundError when absent."""
    async def execute(self, product_id: str) -> ProductSummary: ...


class InventoryLookup(Protocol):
    """Consumed by product enrichment. Any StockroomError means 'no stock data'."""
    async def execute(self, product_id: str) -> InventorySnapshot: ...
