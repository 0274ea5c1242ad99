"""SQL Repositories — verifies persistence against SQLite (in-memory, file-backed for concurrency).

Tests cover:
    - Product create / get / update / delete / list ordering
    - Inventory create / get, missing rows return None
    - Guarded increments: adjust / reserve / release reject without changing rows
    - Unique product_id and FK violations translate to Storage errors
    - Deleting a product cascades to its inventory row
    - Concurrent adjustments on separate sessions sum; the reserved floor holds
"""

import asyncio
from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from app.core.errors import StorageConflictError, StorageReferenceError
from app.core.inventory import Inventory
from app.core.price import Price
from app.core.product import Product
from app.db.base import Base
from app.infrastructure.database import enable_sqlite_foreign_keys
from app.infrastructure.inventory_repository import SqlInventoryRepository
from app.infrastructure.product_repository import SqlProductRepository


@pytest.fixture
def products(test_db):
    return SqlProductRepository(test_db)


@pytest.fixture
def inventory(test_db):
    return SqlInventoryRepository(test_db)


@pytest.fixture
async def widget(products):
    product = Product("p1", "Widget", Price("10.00", "USD"))
    await products.create(product)
    return product


@pytest.fixture
async def stocked(inventory, widget):
    """p1 inventory with quantity=50, reserved=10."""
    await inventory.create(Inventory("i1", "p1", 50, "A-1"))
    assert await inventory.reserve_stock("p1", 10)


# ─── Products ────────────────────────────────────────────────────

async def test_product_roundtrip(products, widget):
    loaded = await products.get_by_id("p1")
    assert loaded.name == "Widget"
    assert loaded.price.amount == Decimal("10.00")
    assert loaded.price.currency == "USD"


async def test_missing_product_returns_none(products):
    assert await products.get_by_id("nope") is None


async def test_product_update(products, widget):
    widget.update_name("Gadget")
    widget.update_price(Price("7.25", "EUR"))
    await products.update(widget)

    loaded = await products.get_by_id("p1")
    assert loaded.name == "Gadget"
    assert loaded.price.equals(Price("7.25", "EUR"))


async def test_product_delete(products, widget):
    await products.delete("p1")
    assert await products.get_by_id("p1") is None


async def test_list_products_newest_first_with_paging(products):
    base = datetime(2024, 1, 1, tzinfo=timezone.utc)
    for i in range(4):
        ts = base + timedelta(hours=i)
        await products.create(
            Product.reconstruct(f"p{i}", f"P{i}", Price(i, "USD"), ts, ts),
        )
    page = await products.list_products(limit=2, offset=1)
    assert [p.id for p in page] == ["p2", "p1"]


# ─── Inventory ───────────────────────────────────────────────────

async def test_inventory_roundtrip(inventory, stocked):
    loaded = await inventory.get_by_product_id("p1")
    assert loaded.id == "i1"
    assert loaded.quantity == 50
    assert loaded.reserved_quantity == 10
    assert loaded.available_quantity == 40
    assert loaded.location == "A-1"


async def test_missing_inventory_returns_none(inventory):
    assert await inventory.get_by_product_id("p1") is None


async def test_empty_location_reads_back_empty(inventory, widget):
    await inventory.create(Inventory("i1", "p1", 5))
    assert (await inventory.get_by_product_id("p1")).location == ""


async def test_inventory_update(inventory, stocked):
    inv = await inventory.get_by_product_id("p1")
    inv.update_location("B-7")
    await inventory.update(inv)
    assert (await inventory.get_by_product_id("p1")).location == "B-7"


async def test_second_inventory_for_product_is_conflict(inventory, stocked):
    with pytest.raises(StorageConflictError):
        await inventory.create(Inventory("i2", "p1", 1))


async def test_inventory_for_missing_product_is_reference_error(inventory):
    with pytest.raises(StorageReferenceError):
        await inventory.create(Inventory("i1", "missing-product", 1))


async def test_adjust_stock_increments(inventory, stocked):
    assert await inventory.adjust_stock("p1", 5) is True
    assert await inventory.adjust_stock("p1", -3) is True
    assert (await inventory.get_by_product_id("p1")).quantity == 52


async def test_adjust_stock_guard_keeps_reserved_floor(inventory, stocked):
    assert await inventory.adjust_stock("p1", -41) is False
    assert (await inventory.get_by_product_id("p1")).quantity == 50
    assert await inventory.adjust_stock("p1", -40) is True
    assert (await inventory.get_by_product_id("p1")).available_quantity == 0


async def test_adjust_stock_missing_row(inventory):
    assert await inventory.adjust_stock("nope", 1) is False


async def test_reserve_stock_guard(inventory, stocked):
    assert await inventory.reserve_stock("p1", 41) is False
    assert await inventory.reserve_stock("p1", 40) is True
    loaded = await inventory.get_by_product_id("p1")
    assert loaded.reserved_quantity == 50
    assert loaded.available_quantity == 0


async def test_release_stock_guard(inventory, stocked):
    assert await inventory.release_stock("p1", 11) is False
    assert await inventory.release_stock("p1", 10) is True
    assert (await inventory.get_by_product_id("p1")).reserved_quantity == 0


async def test_inventory_delete(inventory, stocked):
    await inventory.delete("p1")
    assert await inventory.get_by_product_id("p1") is None


async def test_deleting_product_cascades_to_inventory(products, inventory, stocked):
    await products.delete("p1")
    assert await inventory.get_by_product_id("p1") is None


# ─── Concurrency ─────────────────────────────────────────────────

@pytest.fixture
async def file_sessions(tmp_path):
    """Session factory on a file-backed SQLite DB: one connection per session."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'stock.db'}")
    enable_sqlite_foreign_keys(engine)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    await engine.dispose()


async def _seed(sessions, quantity, reserved):
    async with sessions() as session:
        await SqlProductRepository(session).create(
            Product("p1", "Widget", Price("10.00", "USD")),
        )
        repo = SqlInventoryRepository(session)
        await repo.create(Inventory("i1", "p1", quantity))
        if reserved:
            assert await repo.reserve_stock("p1", reserved)


async def _adjust(sessions, delta):
    async with sessions() as session:
        return await SqlInventoryRepository(session).adjust_stock("p1", delta)


async def _current(sessions):
    async with sessions() as session:
        return await SqlInventoryRepository(session).get_by_product_id("p1")


async def test_concurrent_adjustments_sum(file_sessions):
    await _seed(file_sessions, 100, 0)
    results = await asyncio.gather(*(_adjust(file_sessions, 1) for _ in range(20)))
    assert all(results)
    assert (await _current(file_sessions)).quantity == 120


async def test_concurrent_mixed_adjustments_sum(file_sessions):
    await _seed(file_sessions, 100, 0)
    deltas = [5, -3] * 10
    results = await asyncio.gather(*(_adjust(file_sessions, d) for d in deltas))
    assert all(results)
    assert (await _current(file_sessions)).quantity == 100 + sum(deltas)


async def test_concurrent_decrements_stop_at_reserved_floor(file_sessions):
    await _seed(file_sessions, 20, 10)
    results = await asyncio.gather(*(_adjust(file_sessions, -1) for _ in range(15)))
    assert results.count(True) == 10
    assert results.count(False) == 5
    current = await _current(file_sessions)
    assert current.quantity == 10
    assert current.reserved_quantity == 10
    assert current.available_quantity == 0
