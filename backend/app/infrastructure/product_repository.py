"""Product Repository — SQL implementation of the product command/query protocols.

Invariants:
    - get_by_id returns None for a missing row (never raises "not found")
    - Rows become entities only through Product.reconstruct (trusted path)
    - Every SQLAlchemy failure leaves as a StorageError sub-kind
    - Write methods commit; the caller's session holds no pending state afterwards
"""

import logging

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.price import Price
from app.core.product import Product
from app.infrastructure.database import storage_errors
from app.models.product import ProductRecord

logger = logging.getLogger(__name__)


def _to_entity(row: ProductRecord) -> Product:
    return Product.reconstruct(
        id=row.id,
        name=row.name,
        price=Price(row.price_amount, row.price_currency),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


class SqlProductRepository:
    """Implements ProductCommandRepository and ProductQueryRepository."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, product: Product) -> None:
        async with storage_errors(self.db, "create_product"):
            self.db.add(ProductRecord(
                id=product.id,
                name=product.name,
                price_amount=product.price.amount,
                price_currency=product.price.currency,
                created_at=product.created_at,
                updated_at=product.updated_at,
            ))
            await self.db.commit()

    async def get_by_id(self, product_id: str) -> Product | None:
        async with storage_errors(self.db, "get_product"):
            result = await self.db.execute(
                select(ProductRecord)
                .where(ProductRecord.id == product_id)
                .execution_options(populate_existing=True),
            )
            row = result.scalar_one_or_none()
        return _to_entity(row) if row else None

    async def list_products(self, limit: int, offset: int) -> list[Product]:
        async with storage_errors(self.db, "list_products"):
            result = await self.db.execute(
                select(ProductRecord)
                .order_by(ProductRecord.created_at.desc())
                .limit(limit)
                .offset(offset),
            )
            rows = result.scalars().all()
        return [_to_entity(row) for row in rows]

    async def update(self, product: Product) -> None:
        async with storage_errors(self.db, "update_product"):
            await self.db.execute(
                update(ProductRecord)
                .where(ProductRecord.id == product.id)
                .values(
                    name=product.name,
                    price_amount=product.price.amount,
                    price_currency=product.price.currency,
                    updated_at=product.updated_at,
                ),
            )
            await self.db.commit()

    async def delete(self, product_id: str) -> None:
        async with storage_errors(self.db, "delete_product"):
            await self.db.execute(
                delete(ProductRecord).where(ProductRecord.id == product_id),
            )
            await self.db.commit()
        logger.info(f"Product {product_id} deleted", extra={"product_id": product_id})
