"""Inventory Use Cases — create, get, adjust, reserve, release stock for a product.

Invariants:
    - Empty product id is rejected with InvalidInputError before any IO
    - One inventory row per product: create fails with InventoryExistsError
      (checked up front, and a unique-constraint race maps to the same error)
    - Product existence is checked through ProductLookup; its not-found is
      re-raised with an operation-specific message, other failures pass through
    - GetInventory survives a deleted product: sentinel name, zero price, no currency
    - Stock changes go through the entity first (business rules) and are then
      persisted as ONE guarded increment; the returned view is re-read from storage

Design Decisions:
    - Atomic increment over read-modify-write: two concurrent adjustments sum
      instead of the later one overwriting the earlier
    - A guard rejection means another writer moved the row between our read
      and our write; it surfaces as the same error the entity would raise
"""

import logging
from decimal import Decimal
from uuid import uuid4

from app.core.domain_types import DELETED_PRODUCT_NAME, StockOperation
from app.core.errors import (
    ErrorContext,
    InsufficientStockError,
    InvalidAdjustmentError,
    InvalidInputError,
    InvalidQuantityError,
    InventoryExistsError,
    InventoryNotFoundError,
    ProductNotFoundError,
    StorageConflictError,
    StorageReferenceError,
)
from app.core.inventory import Inventory
from app.core.repository_protocols import (
    InventoryCommandRepository,
    InventoryQueryRepository,
    ProductLookup,
    ProductSummary,
)
from app.services.views import InventoryView

logger = logging.getLogger(__name__)


def _require_product_id(product_id: str) -> None:
    if not product_id or not product_id.strip():
        raise InvalidInputError("product id is required", field="product_id")


async def _require_product(
    lookup: ProductLookup, product_id: str, action: str,
) -> ProductSummary:
    try:
        return await lookup.execute(product_id)
    except ProductNotFoundError as e:
        raise ProductNotFoundError(
            f"cannot {action} inventory: product not found",
            context=ErrorContext(product_id=product_id, operation=action),
        ) from e


async def _load(query: InventoryQueryRepository, product_id: str) -> Inventory:
    inventory = await query.get_by_product_id(product_id)
    if inventory is None:
        raise InventoryNotFoundError(
            context=ErrorContext(product_id=product_id),
        )
    return inventory


class CreateInventory:
    def __init__(
        self,
        command: InventoryCommandRepository,
        query: InventoryQueryRepository,
        product_lookup: ProductLookup,
    ):
        self.command = command
        self.query = query
        self.product_lookup = product_lookup

    async def execute(
        self, product_id: str, quantity: int, location: str = "",
    ) -> InventoryView:
        _require_product_id(product_id)
        if quantity < 0:
            raise InvalidQuantityError()

        product = await _require_product(self.product_lookup, product_id, "create")
        if await self.query.get_by_product_id(product_id) is not None:
            raise InventoryExistsError(context=ErrorContext(product_id=product_id))

        inventory = Inventory(str(uuid4()), product_id, quantity, location or "")
        try:
            await self.command.create(inventory)
        except StorageConflictError as e:
            raise InventoryExistsError(
                context=ErrorContext(product_id=product_id),
            ) from e
        except StorageReferenceError as e:
            # Product vanished between the lookup and the insert
            raise ProductNotFoundError(
                "cannot create inventory: product not found",
            ) from e

        logger.info(
            f"Inventory created with {quantity} units at '{inventory.location}'",
            extra={"product_id": product_id, "operation": StockOperation.CREATE.value},
        )
        return InventoryView.from_entity(inventory, product)


class GetInventory:
    def __init__(
        self, query: InventoryQueryRepository, product_lookup: ProductLookup,
    ):
        self.query = query
        self.product_lookup = product_lookup

    async def execute(self, product_id: str) -> InventoryView:
        _require_product_id(product_id)
        inventory = await _load(self.query, product_id)
        try:
            product = await self.product_lookup.execute(product_id)
        except ProductNotFoundError:
            logger.warning(
                "Inventory references a deleted product",
                extra={"product_id": product_id},
            )
            product = ProductSummary(
                id=product_id,
                name=DELETED_PRODUCT_NAME,
                price_amount=Decimal("0"),
                price_currency="",
            )
        return InventoryView.from_entity(inventory, product)


class AdjustInventory:
    def __init__(
        self,
        command: InventoryCommandRepository,
        query: InventoryQueryRepository,
        product_lookup: ProductLookup,
    ):
        self.command = command
        self.query = query
        self.product_lookup = product_lookup

    async def execute(
        self, product_id: str, adjustment: int, reason: str = "",
    ) -> InventoryView:
        _require_product_id(product_id)
        if adjustment == 0:
            raise InvalidAdjustmentError()

        product = await _require_product(self.product_lookup, product_id, "adjust")
        inventory = await _load(self.query, product_id)
        inventory.adjust_quantity(adjustment)

        if not await self.command.adjust_stock(product_id, adjustment):
            # Row deleted since the read surfaces as not-found
            await _load(self.query, product_id)
            raise InvalidQuantityError("cannot adjust quantity below reserved amount")

        logger.info(
            f"Inventory adjusted by {adjustment:+d} ({reason or 'no reason given'})",
            extra={"product_id": product_id, "operation": StockOperation.ADJUST.value},
        )
        return InventoryView.from_entity(await _load(self.query, product_id), product)


class ReserveStock:
    """Hold units for a pending order; held units stop counting as available."""

    def __init__(
        self,
        command: InventoryCommandRepository,
        query: InventoryQueryRepository,
        get_inventory: GetInventory,
    ):
        self.command = command
        self.query = query
        self.get_inventory = get_inventory

    async def execute(self, product_id: str, quantity: int) -> InventoryView:
        _require_product_id(product_id)
        inventory = await _load(self.query, product_id)
        inventory.reserve(quantity)

        if not await self.command.reserve_stock(product_id, quantity):
            current = await _load(self.query, product_id)
            raise InsufficientStockError(quantity, current.available_quantity)

        logger.info(
            f"Reserved {quantity} units",
            extra={"product_id": product_id, "operation": StockOperation.RESERVE.value},
        )
        return await self.get_inventory.execute(product_id)


class ReleaseStock:
    def __init__(
        self,
        command: InventoryCommandRepository,
        query: InventoryQueryRepository,
        get_inventory: GetInventory,
    ):
        self.command = command
        self.query = query
        self.get_inventory = get_inventory

    async def execute(self, product_id: str, quantity: int) -> InventoryView:
        _require_product_id(product_id)
        inventory = await _load(self.query, product_id)
        inventory.release(quantity)

        if not await self.command.release_stock(product_id, quantity):
            raise InvalidQuantityError("cannot release more than reserved quantity")

        logger.info(
            f"Released {quantity} units",
            extra={"product_id": product_id, "operation": StockOperation.RELEASE.value},
        )
        return await self.get_inventory.execute(product_id)
