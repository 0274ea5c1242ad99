"""Product Schemas — request bodies and response shapes for /products.

Invariants:
    - Request models only check shape and types; business rules (empty name,
      negative price, currency length) are enforced by the domain so every
      caller gets the same error codes
    - Responses are built from service views via from_attributes
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.common import Money


class ProductCreate(BaseModel):
    """Product creation payload."""
    name: str = Field(max_length=255)
    price_amount: Money
    price_currency: str = Field(max_length=8)


class ProductUpdate(BaseModel):
    """Full replacement of a product's mutable fields."""
    name: str = Field(max_length=255)
    price_amount: Money
    price_currency: str = Field(max_length=8)


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price_amount: Money
    price_currency: str
    created_at: datetime
    updated_at: datetime


class ProductDetailResponse(ProductResponse):
    """Single-product read, with stock figures when inventory exists."""
    has_inventory: bool = False
    stock_quantity: int = 0
    available_quantity: int = 0


class ProductListResponse(BaseModel):
    products: list[ProductResponse]
    limit: int
    offset: int
    count: int
