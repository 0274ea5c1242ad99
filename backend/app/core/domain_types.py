"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ProductId, InventoryId wrap opaque strings (UUID text) — never parsed
    - Currency codes are exactly CURRENCY_CODE_LENGTH characters
    - Page sizes are bounded by MAX_PAGE_SIZE
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ProductId = NewType("ProductId", str)
InventoryId = NewType("InventoryId", str)


# ─── Constants ───────────────────────────────────────────────────

CURRENCY_CODE_LENGTH = 3
MAX_PAGE_SIZE = 100

# Product name reported for inventory whose product row is gone
DELETED_PRODUCT_NAME = "Unknown (Product Deleted)"


# ─── Enums ───────────────────────────────────────────────────────

class StockOperation(str, Enum):
    """Stock mutations — surfaced in logs and error context."""
    CREATE = "create"
    ADJUST = "adjust"
    RESERVE = "reserve"
    RELEASE = "release"
