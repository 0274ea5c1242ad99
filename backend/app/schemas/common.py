"""Common Schemas — success envelope and shared field types.

Invariants:
    - Every successful response is {"success": true, "message": ..., "data": ...}
    - Money amounts are Decimal in Python and JSON numbers on the wire
    - The JSON number is a binary float: exact up to 15 significant digits,
      which covers NUMERIC(19,4) amounts below 10^11; larger amounts round
"""

from decimal import Decimal
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, PlainSerializer

T = TypeVar("T")

Money = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json"),
]


class Envelope(BaseModel, Generic[T]):
    """Success wrapper shared by all resource endpoints."""
    success: bool = True
    message: str
    data: T | None = None
