"""Product Routes — CRUD endpoints for products.

Invariants:
    - Routes only translate HTTP <-> use-case calls; rules live in services/core
    - Domain errors propagate to the global StockroomError handler
    - Every success is wrapped in the Envelope
"""

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import UseCases, get_use_cases
from app.schemas.common import Envelope
from app.schemas.product import (
    ProductCreate,
    ProductDetailResponse,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
)

router = APIRouter(prefix="/api/v1/products", tags=["products"])


@router.post(
    "", response_model=Envelope[ProductResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_product(
    body: ProductCreate, uc: UseCases = Depends(get_use_cases),
):
    """Create a product."""
    view = await uc.create_product.execute(
        body.name, body.price_amount, body.price_currency,
    )
    return Envelope(
        message="Product created successfully",
        data=ProductResponse.model_validate(view),
    )


@router.get("", response_model=Envelope[ProductListResponse])
async def list_products(
    limit: int = Query(20),
    offset: int = Query(0),
    uc: UseCases = Depends(get_use_cases),
):
    """List products, newest first."""
    views = await uc.list_products.execute(limit, offset)
    return Envelope(
        message="Products retrieved successfully",
        data=ProductListResponse(
            products=[ProductResponse.model_validate(v) for v in views],
            limit=limit,
            offset=offset,
            count=len(views),
        ),
    )


@router.get("/{product_id}", response_model=Envelope[ProductDetailResponse])
async def get_product(product_id: str, uc: UseCases = Depends(get_use_cases)):
    """Get a product with its stock figures (when inventory exists)."""
    view = await uc.get_product.execute(product_id)
    return Envelope(
        message="Product retrieved successfully",
        data=ProductDetailResponse.model_validate(view),
    )


@router.put("/{product_id}", response_model=Envelope[ProductResponse])
async def update_product(
    product_id: str, body: ProductUpdate,
    uc: UseCases = Depends(get_use_cases),
):
    """Replace a product's name and price."""
    view = await uc.update_product.execute(
        product_id, body.name, body.price_amount, body.price_currency,
    )
    return Envelope(
        message="Product updated successfully",
        data=ProductResponse.model_validate(view),
    )


@router.delete("/{product_id}", response_model=Envelope[None])
async def delete_product(product_id: str, uc: UseCases = Depends(get_use_cases)):
    """Delete a product together with its inventory."""
    await uc.delete_product.execute(product_id)
    return Envelope(message="Product deleted successfully")
