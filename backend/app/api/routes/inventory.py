"""Inventory Routes — stock records per product.

Invariants:
    - adjust / reserve / release respond with figures re-read from storage
    - Domain errors propagate to the global StockroomError handler
"""

from fastapi import APIRouter, Depends, status

from app.api.dependencies import UseCases, get_use_cases
from app.schemas.common import Envelope
from app.schemas.inventory import (
    InventoryAdjust,
    InventoryCreate,
    InventoryResponse,
    StockMovement,
)

router = APIRouter(prefix="/api/v1/inventory", tags=["inventory"])


@router.post(
    "", response_model=Envelope[InventoryResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_inventory(
    body: InventoryCreate, uc: UseCases = Depends(get_use_cases),
):
    """Create the inventory record for an existing product."""
    view = await uc.create_inventory.execute(
        body.product_id, body.quantity, body.location,
    )
    return Envelope(
        message="Inventory created successfully",
        data=InventoryResponse.model_validate(view),
    )


@router.patch("/adjust", response_model=Envelope[InventoryResponse])
async def adjust_inventory(
    body: InventoryAdjust, uc: UseCases = Depends(get_use_cases),
):
    """Add (positive) or remove (negative) units."""
    view = await uc.adjust_inventory.execute(
        body.product_id, body.adjustment, body.reason,
    )
    return Envelope(
        message="Inventory adjusted successfully",
        data=InventoryResponse.model_validate(view),
    )


@router.get("/{product_id}", response_model=Envelope[InventoryResponse])
async def get_inventory(product_id: str, uc: UseCases = Depends(get_use_cases)):
    view = await uc.get_inventory.execute(product_id)
    return Envelope(
        message="Inventory retrieved successfully",
        data=InventoryResponse.model_validate(view),
    )


@router.post("/{product_id}/reserve", response_model=Envelope[InventoryResponse])
async def reserve_stock(
    product_id: str, body: StockMovement,
    uc: UseCases = Depends(get_use_cases),
):
    view = await uc.reserve_stock.execute(product_id, body.quantity)
    return Envelope(
        message="Stock reserved successfully",
        data=InventoryResponse.model_validate(view),
    )


@router.post("/{product_id}/release", response_model=Envelope[InventoryResponse])
async def release_stock(
    product_id: str, body: StockMovement,
    uc: UseCases = Depends(get_use_cases),
):
    view = await uc.release_stock.execute(product_id, body.quantity)
    return Envelope(
        message="Stock released successfully",
        data=InventoryResponse.model_validate(view),
    )
