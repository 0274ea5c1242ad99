"""Product Use Cases — create, get (with optional stock enrichment), update, delete, list.

Invariants:
    - Empty product id is rejected with InvalidInputError before any IO
    - A missing product is ProductNotFoundError (query repos return None, never raise)
    - Enrichment failure NEVER fails GetProduct: the product comes back without stock data
    - Every write is logged at info with product_id

Design Decisions:
    - One class per operation with a single async execute(): wiring composes them
    - GetProduct takes the InventoryLookup as an optional collaborator so the same
      class backs both the public endpoint and the ProductLookup adapter
"""

import logging
from decimal import Decimal
from uuid import uuid4

from app.core.domain_types import MAX_PAGE_SIZE
from app.core.errors import (
    InvalidInputError,
    InventoryNotFoundError,
    ProductAlreadyExistsError,
    ProductNotFoundError,
    StockroomError,
    StorageConflictError,
)
from app.core.price import Price
from app.core.product import Product
from app.core.repository_protocols import (
    InventoryLookup,
    InventorySnapshot,
    ProductCommandRepository,
    ProductQueryRepository,
)
from app.services.views import ProductView

logger = logging.getLogger(__name__)


def _require_id(product_id: str) -> None:
    if not product_id or not product_id.strip():
        raise InvalidInputError("product id is required", field="id")


async def _load(query: ProductQueryRepository, product_id: str) -> Product:
    product = await query.get_by_id(product_id)
    if product is None:
        raise ProductNotFoundError()
    return product


class CreateProduct:
    def __init__(self, command: ProductCommandRepository):
        self.command = command

    async def execute(
        self, name: str, price_amount: Decimal, price_currency: str,
    ) -> ProductView:
        if not name or not name.strip():
            raise InvalidInputError("product name is required", field="name")
        price = Price(price_amount, price_currency)
        product = Product(str(uuid4()), name, price)

        try:
            await self.command.create(product)
        except StorageConflictError as e:
            raise ProductAlreadyExistsError() from e

        logger.info(
            f"Product created: {product.name} ({product.price})",
            extra={"product_id": product.id, "operation": "create_product"},
        )
        return ProductView.from_entity(product)


class GetProduct:
    """Fetch one product; attach stock figures when an InventoryLookup is wired."""

    def __init__(
        self,
        query: ProductQueryRepository,
        inventory_lookup: InventoryLookup | None = None,
    ):
        self.query = query
        self.inventory_lookup = inventory_lookup

    async def execute(self, product_id: str) -> ProductView:
        _require_id(product_id)
        product = await _load(self.query, product_id)
        return ProductView.from_entity(product, await self._stock_for(product_id))

    async def _stock_for(self, product_id: str) -> InventorySnapshot | None:
        if self.inventory_lookup is None:
            return None
        try:
            return await self.inventory_lookup.execute(product_id)
        except InventoryNotFoundError:
            return None
        except StockroomError as e:
            logger.warning(
                f"Stock enrichment unavailable: {e.message}",
                extra={"product_id": product_id, "error_code": e.code.value},
            )
            return None
        except Exception as e:
            logger.warning(
                f"Stock enrichment failed: {e}",
                exc_info=True,
                extra={"product_id": product_id},
            )
            return None


class UpdateProduct:
    def __init__(
        self, command: ProductCommandRepository, query: ProductQueryRepository,
    ):
        self.command = command
        self.query = query

    async def execute(
        self,
        product_id: str,
        name: str,
        price_amount: Decimal,
        price_currency: str,
    ) -> ProductView:
        _require_id(product_id)
        if name and not name.strip():
            raise InvalidInputError("product name is required", field="name")
        product = await _load(self.query, product_id)

        # Validate both fields before touching the entity
        price = Price(price_amount, price_currency)
        product.update_name(name)
        product.update_price(price)

        await self.command.update(product)
        logger.info(
            f"Product updated: {product.name} ({product.price})",
            extra={"product_id": product.id, "operation": "update_product"},
        )
        return ProductView.from_entity(product)


class DeleteProduct:
    """Remove a product; its inventory row is dropped by the FK cascade."""

    def __init__(
        self, command: ProductCommandRepository, query: ProductQueryRepository,
    ):
        self.command = command
        self.query = query

    async def execute(self, product_id: str) -> None:
        _require_id(product_id)
        await _load(self.query, product_id)
        await self.command.delete(product_id)


class ListProducts:
    def __init__(self, query: ProductQueryRepository):
        self.query = query

    async def execute(self, limit: int = 20, offset: int = 0) -> list[ProductView]:
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise InvalidInputError(
                f"limit must be between 1 and {MAX_PAGE_SIZE}", field="limit",
            )
        if offset < 0:
            raise InvalidInputError("offset cannot be negative", field="offset")
        products = await self.query.list_products(limit, offset)
        return [ProductView.from_entity(p) for p in products]
