"""Inventory — verifies stock invariants across reserve / release / adjust.

Tests:
    - Constructor validation (empty ids, negative quantity) and reserved starts at 0
    - reserve / release bounds, and reserve(q) + release(q) restores the state
    - adjust_quantity never drops below zero or below reserved; failures change nothing
    - quantity >= reserved >= 0 holds after any sequence of operations
"""

from datetime import datetime, timezone

import pytest

from app.core.errors import (
    InsufficientStockError,
    InvalidInputError,
    InvalidQuantityError,
    StockroomError,
)
from app.core.inventory import Inventory


def _stocked(quantity: int = 50, reserved: int = 10) -> Inventory:
    ts = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return Inventory.reconstruct("i1", "p1", quantity, reserved, "A-1", ts, ts)


def _state(inv: Inventory) -> tuple[int, int]:
    return inv.quantity, inv.reserved_quantity


# ─── Construction ────────────────────────────────────────────────

def test_new_inventory_starts_unreserved():
    inv = Inventory("i1", "p1", 100, "Warehouse A")
    assert inv.quantity == 100
    assert inv.reserved_quantity == 0
    assert inv.available_quantity == 100
    assert inv.location == "Warehouse A"


def test_location_defaults_to_empty():
    assert Inventory("i1", "p1", 0).location == ""


def test_negative_quantity_rejected():
    with pytest.raises(InvalidQuantityError):
        Inventory("i1", "p1", -1)


@pytest.mark.parametrize("inv_id, product_id", [("", "p1"), ("i1", "")])
def test_empty_ids_rejected(inv_id, product_id):
    with pytest.raises(InvalidInputError):
        Inventory(inv_id, product_id, 10)


# ─── Reserve / Release ───────────────────────────────────────────

def test_reserve_reduces_available():
    inv = _stocked(50, 10)
    inv.reserve(15)
    assert inv.reserved_quantity == 25
    assert inv.available_quantity == 25


@pytest.mark.parametrize("qty", [0, -5])
def test_reserve_non_positive_rejected(qty):
    inv = _stocked()
    with pytest.raises(InvalidQuantityError):
        inv.reserve(qty)
    assert _state(inv) == (50, 10)


def test_reserve_more_than_available_rejected():
    inv = _stocked(50, 10)
    with pytest.raises(InsufficientStockError) as exc:
        inv.reserve(41)
    assert exc.value.requested == 41
    assert exc.value.available == 40
    assert _state(inv) == (50, 10)


def test_reserve_exactly_available_allowed():
    inv = _stocked(50, 10)
    inv.reserve(40)
    assert inv.available_quantity == 0


def test_release_more_than_reserved_rejected():
    inv = _stocked(50, 10)
    with pytest.raises(InvalidQuantityError):
        inv.release(11)
    assert _state(inv) == (50, 10)


@pytest.mark.parametrize("qty", [0, -1])
def test_release_non_positive_rejected(qty):
    with pytest.raises(InvalidQuantityError):
        _stocked().release(qty)


@pytest.mark.parametrize("qty", [1, 20, 40])
def test_reserve_then_release_restores_reserved(qty):
    inv = _stocked(50, 10)
    inv.reserve(qty)
    inv.release(qty)
    assert _state(inv) == (50, 10)


# ─── Adjust ──────────────────────────────────────────────────────

def test_adjust_below_reserved_rejected_and_state_unchanged():
    inv = _stocked(50, 10)
    with pytest.raises(InvalidQuantityError):
        inv.adjust_quantity(-60)
    assert _state(inv) == (50, 10)


def test_adjust_down_to_reserved_allowed():
    inv = _stocked(50, 10)
    inv.adjust_quantity(-40)
    assert inv.quantity == 10
    assert inv.available_quantity == 0


def test_adjust_between_zero_and_reserved_rejected():
    inv = _stocked(50, 10)
    with pytest.raises(InvalidQuantityError, match="below reserved"):
        inv.adjust_quantity(-45)
    assert inv.quantity == 50


def test_adjust_up_bumps_updated_at():
    inv = _stocked(50, 10)
    before = inv.updated_at
    inv.adjust_quantity(5)
    assert inv.quantity == 55
    assert inv.updated_at > before


def test_update_location():
    inv = _stocked()
    inv.update_location("B-7")
    assert inv.location == "B-7"


def test_invariant_holds_over_operation_sequence():
    inv = Inventory("i1", "p1", 20)
    ops = [
        ("reserve", 5), ("adjust_quantity", -10), ("reserve", 10),
        ("adjust_quantity", -6), ("release", 3), ("adjust_quantity", -20),
        ("reserve", 100), ("release", 50), ("adjust_quantity", 7),
        ("release", 12), ("adjust_quantity", -15),
    ]
    for name, arg in ops:
        before = _state(inv)
        try:
            getattr(inv, name)(arg)
        except StockroomError:
            assert _state(inv) == before
        assert inv.quantity >= inv.reserved_quantity >= 0
        assert inv.available_quantity == inv.quantity - inv.reserved_quantity
