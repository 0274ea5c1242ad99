"""Inventory Repository — SQL implementation of the inventory command/query protocols.

Invariants:
    - get_by_product_id returns None for a missing row
    - adjust_stock is ONE statement: quantity = quantity + delta, guarded so the
      new quantity never drops below reserved_quantity; concurrent adjustments
      therefore sum instead of overwriting each other
    - reserve_stock / release_stock are guarded increments of reserved_quantity
    - A guard rejection (or missing row) returns False and changes nothing
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.inventory import Inventory
from app.infrastructure.database import storage_errors
from app.models.inventory import InventoryRecord

logger = logging.getLogger(__name__)


def _to_entity(row: InventoryRecord) -> Inventory:
    return Inventory.reconstruct(
        id=row.id,
        product_id=row.product_id,
        quantity=row.quantity,
        reserved_quantity=row.reserved_quantity,
        location=row.location or "",
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlInventoryRepository:
    """Implements InventoryCommandRepository and InventoryQueryRepository."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, inventory: Inventory) -> None:
        async with storage_errors(self.db, "create_inventory"):
            self.db.add(InventoryRecord(
                id=inventory.id,
                product_id=inventory.product_id,
                quantity=inventory.quantity,
                reserved_quantity=inventory.reserved_quantity,
                location=inventory.location or None,
                created_at=inventory.created_at,
                updated_at=inventory.updated_at,
            ))
            await self.db.commit()

    async def get_by_product_id(self, product_id: str) -> Inventory | None:
        async with storage_errors(self.db, "get_inventory"):
            result = await self.db.execute(
                select(InventoryRecord)
                .where(InventoryRecord.product_id == product_id)
                .execution_options(populate_existing=True),
            )
            row = result.scalar_one_or_none()
        return _to_entity(row) if row else None

    async def update(self, inventory: Inventory) -> None:
        async with storage_errors(self.db, "update_inventory"):
            await self.db.execute(
                update(InventoryRecord)
                .where(InventoryRecord.product_id == inventory.product_id)
                .values(
                    quantity=inventory.quantity,
                    reserved_quantity=inventory.reserved_quantity,
                    location=inventory.location or None,
                    updated_at=inventory.updated_at,
                ),
            )
            await self.db.commit()

    async def delete(self, product_id: str) -> None:
        async with storage_errors(self.db, "delete_inventory"):
            await self.db.execute(
                delete(InventoryRecord)
                .where(InventoryRecord.product_id == product_id),
            )
            await self.db.commit()

    async def adjust_stock(self, product_id: str, delta: int) -> bool:
        new_quantity = InventoryRecord.quantity + delta
        return await self._guarded_update(
            "adjust_stock",
            product_id,
            (new_quantity >= 0) & (new_quantity >= InventoryRecord.reserved_quantity),
            quantity=new_quantity,
        )

    async def reserve_stock(self, product_id: str, quantity: int) -> bool:
        return await self._guarded_update(
            "reserve_stock",
            product_id,
            InventoryRecord.quantity - InventoryRecord.reserved_quantity >= quantity,
            reserved_quantity=InventoryRecord.reserved_quantity + quantity,
        )

    async def release_stock(self, product_id: str, quantity: int) -> bool:
        return await self._guarded_update(
            "release_stock",
            product_id,
            InventoryRecord.reserved_quantity >= quantity,
            reserved_quantity=InventoryRecord.reserved_quantity - quantity,
        )

    async def _guarded_update(self, operation: str, product_id: str, guard, **values) -> bool:
        async with storage_errors(self.db, operation):
            result = await self.db.execute(
                update(InventoryRecord)
                .where(InventoryRecord.product_id == product_id)
                .where(guard)
                .values(updated_at=datetime.now(timezone.utc), **values)
                .execution_options(synchronize_session=False),
            )
            await self.db.commit()
        applied = result.rowcount == 1
        if not applied:
            logger.warning(
                f"{operation} rejected by guard for product {product_id}",
                extra={"product_id": product_id, "operation": operation},
            )
        return applied
