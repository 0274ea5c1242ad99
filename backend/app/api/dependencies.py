"""Request Wiring — builds repositories and use cases over the request's DB session.

Invariants:
    - One container per request; every use case in it shares the same AsyncSession
    - Composition order: basic GetProduct -> ProductLookup -> inventory use cases
      -> InventoryLookup -> enriched GetProduct (no cycle between the modules)

Design Decisions:
    - Plain class + FastAPI Depends over a DI framework: the graph is small and
      explicit; tests override get_db and get the whole graph on the test DB
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.infrastructure.database import get_db
from app.infrastructure.inventory_repository import SqlInventoryRepository
from app.infrastructure.product_repository import SqlProductRepository
from app.services.inventory_use_cases import (
    AdjustInventory,
    CreateInventory,
    GetInventory,
    ReleaseStock,
    ReserveStock,
)
from app.services.lookup_adapters import InventoryLookupAdapter, ProductLookupAdapter
from app.services.product_use_cases import (
    CreateProduct,
    DeleteProduct,
    GetProduct,
    ListProducts,
    UpdateProduct,
)


class UseCases:
    """All use cases for one request, wired against one session."""

    def __init__(self, db: AsyncSession):
        products = SqlProductRepository(db)
        inventory = SqlInventoryRepository(db)

        product_lookup = ProductLookupAdapter(GetProduct(products))

        self.create_inventory = CreateInventory(inventory, inventory, product_lookup)
        self.get_inventory = GetInventory(inventory, product_lookup)
        self.adjust_inventory = AdjustInventory(inventory, inventory, product_lookup)
        self.reserve_stock = ReserveStock(inventory, inventory, self.get_inventory)
        self.release_stock = ReleaseStock(inventory, inventory, self.get_inventory)

        inventory_lookup = InventoryLookupAdapter(self.get_inventory)

        self.create_product = CreateProduct(products)
        self.get_product = GetProduct(products, inventory_lookup)
        self.update_product = UpdateProduct(products, products)
        self.delete_product = DeleteProduct(products, products)
        self.list_products = ListProducts(products)


def get_use_cases(db: AsyncSession = Depends(get_db)) -> UseCases:
    """FastAPI dependency: per-request use-case container."""
    return UseCases(db)
