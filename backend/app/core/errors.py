"""Error Hierarchy — typed, categorized exceptions for all Stockroom failure modes.

Invariants:
    - Every error has a code (ErrorCode), category (ErrorCategory), severity (ErrorSeverity)
    - HTTP status comes from ERROR_CODES, a read-only table built once at import
    - Domain errors (400-level) are recoverable; storage errors (500-level) are critical
    - to_response() produces the REST envelope; no internal details leak into it

Design Decisions:
    - Single hierarchy with StockroomError base: FastAPI global handler catches all
    - StorageError sub-kinds keep the not-found / conflict / reference / connection split
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


class ErrorCode(str, Enum):
    """Stable machine-readable error codes returned to clients."""
    # Generic
    INTERNAL_ERROR = "INTERNAL_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Product
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    PRODUCT_ALREADY_EXISTS = "PRODUCT_ALREADY_EXISTS"
    INVALID_PRODUCT_ID = "INVALID_PRODUCT_ID"
    INVALID_PRODUCT_NAME = "INVALID_PRODUCT_NAME"
    INVALID_PRICE = "INVALID_PRICE"
    CURRENCY_MISMATCH = "CURRENCY_MISMATCH"

    # Inventory
    INVENTORY_NOT_FOUND = "INVENTORY_NOT_FOUND"
    INVENTORY_ALREADY_EXISTS = "INVENTORY_ALREADY_EXISTS"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INVALID_ADJUSTMENT = "INVALID_ADJUSTMENT"

    # Persistence
    DATABASE_ERROR = "DATABASE_ERROR"
    DATABASE_CONNECTION_ERROR = "DATABASE_CONNECTION_ERROR"


@dataclass(frozen=True)
class ErrorCodeMetadata:
    code: ErrorCode
    http_status: int
    description: str


def _build_registry(
    *entries: tuple[ErrorCode, int, str],
) -> Mapping[ErrorCode, ErrorCodeMetadata]:
    table = {
        code: ErrorCodeMetadata(code, http_status, description)
        for code, http_status, description in entries
    }
    return MappingProxyType(table)


ERROR_CODES: Mapping[ErrorCode, ErrorCodeMetadata] = _build_registry(
    (ErrorCode.INTERNAL_ERROR, 500, "Internal server error"),
    (ErrorCode.INVALID_INPUT, 400, "Invalid input provided"),
    (ErrorCode.NOT_FOUND, 404, "Resource not found"),
    (ErrorCode.CONFLICT, 409, "Resource conflict"),
    (ErrorCode.VALIDATION_ERROR, 400, "Validation error"),
    (ErrorCode.PRODUCT_NOT_FOUND, 404, "Product not found"),
    (ErrorCode.PRODUCT_ALREADY_EXISTS, 409, "Product already exists"),
    (ErrorCode.INVALID_PRODUCT_ID, 400, "Invalid product ID"),
    (ErrorCode.INVALID_PRODUCT_NAME, 400, "Invalid product name"),
    (ErrorCode.INVALID_PRICE, 400, "Invalid price"),
    (ErrorCode.CURRENCY_MISMATCH, 400, "Currencies do not match"),
    (ErrorCode.INVENTORY_NOT_FOUND, 404, "Inventory not found"),
    (ErrorCode.INVENTORY_ALREADY_EXISTS, 409, "Inventory already exists"),
    (ErrorCode.INSUFFICIENT_STOCK, 400, "Insufficient stock available"),
    (ErrorCode.INVALID_QUANTITY, 400, "Invalid quantity"),
    (ErrorCode.INVALID_ADJUSTMENT, 400, "Invalid adjustment amount"),
    (ErrorCode.DATABASE_ERROR, 500, "Database error"),
    (ErrorCode.DATABASE_CONNECTION_ERROR, 503, "Database connection error"),
)


def http_status_for(code: ErrorCode) -> int:
    """HTTP status registered for code; 500 for anything unregistered."""
    metadata = ERROR_CODES.get(code)
    return metadata.http_status if metadata else 500


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    product_id: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class StockroomError(Exception):
    """Base exception for all Stockroom errors."""

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status_for(code)

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "product_id": self.context.product_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Validation Errors (400) ────────────────────────────────────

class InvalidInputError(StockroomError):
    """Request-level input failed validation."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, ErrorCode.INVALID_INPUT, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )
        self.field = field


class InvalidProductIdError(StockroomError):
    def __init__(
        self, message: str = "product id cannot be empty",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, ErrorCode.INVALID_PRODUCT_ID, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )


class InvalidProductNameError(StockroomError):
    def __init__(
        self, message: str = "product name cannot be empty",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, ErrorCode.INVALID_PRODUCT_NAME, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )


class InvalidPriceError(StockroomError):
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, ErrorCode.INVALID_PRICE, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )


class CurrencyMismatchError(StockroomError):
    def __init__(self, left: str, right: str, context: ErrorContext | None = None):
        super().__init__(
            f"cannot combine prices in different currencies ({left} vs {right})",
            ErrorCode.CURRENCY_MISMATCH, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context,
        )
        self.currencies = (left, right)


class InvalidQuantityError(StockroomError):
    def __init__(
        self, message: str = "quantity must be non-negative",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, ErrorCode.INVALID_QUANTITY, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context,
        )


class InsufficientStockError(StockroomError):
    def __init__(
        self, requested: int, available: int,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"insufficient stock available: requested {requested}, available {available}",
            ErrorCode.INSUFFICIENT_STOCK, ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context,
        )
        self.requested = requested
        self.available = available


class InvalidAdjustmentError(StockroomError):
    def __init__(
        self, message: str = "adjustment cannot be zero",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, ErrorCode.INVALID_ADJUSTMENT, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context,
        )


# ─── Not Found / Conflict (404, 409) ────────────────────────────

class ProductNotFoundError(StockroomError):
    def __init__(
        self, message: str = "product not found",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, ErrorCode.PRODUCT_NOT_FOUND, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context,
        )


class ProductAlreadyExistsError(StockroomError):
    def __init__(
        self, message: str = "product already exists",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, ErrorCode.PRODUCT_ALREADY_EXISTS, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context,
        )


class InventoryNotFoundError(StockroomError):
    def __init__(
        self, message: str = "inventory not found",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, ErrorCode.INVENTORY_NOT_FOUND, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context,
        )


class InventoryExistsError(StockroomError):
    def __init__(
        self, message: str = "inventory already exists for this product",
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, ErrorCode.INVENTORY_ALREADY_EXISTS, ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context,
        )


# ─── Storage Errors ─────────────────────────────────────────────

class StorageError(StockroomError):
    """Persistence operation failed. Base for all storage sub-kinds."""
    def __init__(
        self,
        message: str,
        operation: str,
        code: ErrorCode = ErrorCode.DATABASE_ERROR,
        category: ErrorCategory = ErrorCategory.DATABASE,
        severity: ErrorSeverity = ErrorSeverity.CRITICAL,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(message, code, category, severity, ctx)
        self.operation = operation


class StorageNotFoundError(StorageError):
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            message, operation, ErrorCode.NOT_FOUND,
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.ERROR, context,
        )


class StorageConflictError(StorageError):
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            message, operation, ErrorCode.CONFLICT,
            ErrorCategory.CONFLICT, ErrorSeverity.ERROR, context,
        )


class StorageReferenceError(StorageError):
    """Foreign key violation: the referenced row does not exist."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            message, operation, ErrorCode.INVALID_INPUT,
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR, context,
        )


class StorageConnectionError(StorageError):
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            message, operation, ErrorCode.DATABASE_CONNECTION_ERROR,
            ErrorCategory.DATABASE, ErrorSeverity.CRITICAL, context,
        )
