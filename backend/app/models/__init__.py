"""ORM Models — SQLAlchemy declarative rows for products and inventory.

Invariants:
    - All models inherit from Base (db/base.py)
    - Rows are mapped to entities by the repositories; entities never see ORM types

Design Decisions:
    - All models imported here so Base.metadata holds every table before
      create_all runs (FK products <- inventory resolves by table name)
"""

from app.models.product import ProductRecord  # noqa: F401
from app.models.inventory import InventoryRecord  # noqa: F401
