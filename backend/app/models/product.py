"""Product ORM — persisted row for the Product entity.

Invariants:
    - id is an opaque 36-char string (UUID text) assigned by the application
    - price_amount is NUMERIC(19, 4) and never negative (CHECK constraint)
    - Deleting a product cascades to its inventory row (FK on inventory side)
"""

from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import CheckConstraint, DateTime, Index, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class ProductRecord(Base):
    """Product row."""
    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price_amount >= 0", name="check_price_amount_positive"),
        Index("idx_products_created_at", "created_at"),
        Index("idx_products_name", "name"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    price_amount: Mapped[Decimal] = mapped_column(
        Numeric(19, 4, asdecimal=True), nullable=False,
    )
    price_currency: Mapped[str] = mapped_column(String(3), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
