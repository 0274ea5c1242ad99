"""Inventory Schemas — request bodies and response shapes for /inventory.

Invariants:
    - quantity / adjustment / reserve amounts are integers; their sign and
      range rules live in the domain (InvalidQuantity, InvalidAdjustment)
    - location and reason are free text, empty when omitted
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import Money


class InventoryCreate(BaseModel):
    product_id: str = Field(max_length=36)
    quantity: int
    location: str = Field("", max_length=255)


class InventoryAdjust(BaseModel):
    """Relative stock change; reason is recorded in the logs only."""
    product_id: str = Field(max_length=36)
    adjustment: int
    reason: str = Field("", max_length=500)


class StockMovement(BaseModel):
    """Reserve / release amount."""
    quantity: int


class InventoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    product_id: str
    product_name: str
    product_price: Money
    product_currency: str
    quantity: int
    reserved_quantity: int
    available_quantity: int
    location: str
    created_at: datetime
    updated_at: datetime
