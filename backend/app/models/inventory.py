"""Inventory ORM — persisted row for the Inventory entity.

Invariants:
    - Exactly one row per product (unique product_id)
    - product_id FK -> products.id with ON DELETE CASCADE
    - quantity >= 0, reserved_quantity >= 0, reserved_quantity <= quantity
      enforced by CHECK constraints as a backstop for the entity rules
"""

from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class InventoryRecord(Base):
    """Inventory row."""
    __tablename__ = "inventory"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="check_quantity_positive"),
        CheckConstraint("reserved_quantity >= 0", name="check_reserved_positive"),
        CheckConstraint(
            "reserved_quantity <= quantity", name="check_reserved_lte_quantity",
        ),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    product_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
        index=True,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    reserved_quantity: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
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
