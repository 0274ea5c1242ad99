"""Cross-module Adapters — narrow lookups each module exposes to the other.

Invariants:
    - ProductLookupAdapter wraps a GetProduct WITHOUT inventory enrichment
      (otherwise product -> inventory -> product would recurse)
    - Errors from the wrapped use case propagate unchanged; callers detect
      "not found" by exception type
"""

from app.core.repository_protocols import InventorySnapshot, ProductSummary
from app.services.inventory_use_cases import GetInventory
from app.services.product_use_cases import GetProduct


class ProductLookupAdapter:
    """ProductLookup backed by the product module's GetProduct."""

    def __init__(self, get_product: GetProduct):
        self.get_product = get_product

    async def execute(self, product_id: str) -> ProductSummary:
        view = await self.get_product.execute(product_id)
        return ProductSummary(
            id=view.id,
            name=view.name,
            price_amount=view.price_amount,
            price_currency=view.price_currency,
        )


class InventoryLookupAdapter:
    """InventoryLookup backed by the inventory module's GetInventory."""

    def __init__(self, get_inventory: GetInventory):
        self.get_inventory = get_inventory

    async def execute(self, product_id: str) -> InventorySnapshot:
        view = await self.get_inventory.execute(product_id)
        return InventorySnapshot(
            quantity=view.quantity,
            available_quantity=view.available_quantity,
        )
