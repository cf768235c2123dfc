"""Error Hierarchy — typed, categorized exceptions for all Storefront failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) abort the request with no mutation; storage errors are 500-level
    - to_response() produces the REST envelope consumed by api/error_handlers.py
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with StorefrontError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - ProductNotFoundError subclasses ResourceNotFoundError: callers that only care about
      "something referenced is missing" catch the parent
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone
from uuid import UUID


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
    DATABASE = "database"
    INTERNAL = "internal"
    CONFLICT = "conflict"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    user_id: str | None = None
    order_id: str | None = None
    product_ids: list[str] | None = None
    debug_info: dict[str, Any] | None = None


class StorefrontError(Exception):
    """Base exception for all Storefront errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "user_id": self.context.user_id,
                    "order_id": self.context.order_id,
                    "product_ids": self.context.product_ids,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(StorefrontError):
    """Request shape accepted by the schema layer but rejected by the core."""
    def __init__(self, message: str, field: str, context: ErrorContext | None = None):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field = field


class ResourceNotFoundError(StorefrontError):
    """Requested resource does not exist."""
    def __init__(
        self,
        resource_type: str,
        resource_id: str,
        context: ErrorContext | None = None,
        code: str = "RESOURCE_NOT_FOUND",
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' not found",
            code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class ProductNotFoundError(ResourceNotFoundError):
    """One or more products referenced by an order do not exist."""
    def __init__(self, product_ids: list[UUID], context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.product_ids = [str(pid) for pid in product_ids]
        super().__init__(
            "Product", ", ".join(ctx.product_ids), ctx, code="PRODUCT_NOT_FOUND",
        )
        self.product_ids = list(product_ids)


@dataclass(frozen=True)
class StockShortfall:
    """One product whose stock cannot cover the requested quantity."""
    product_id: UUID
    requested: int
    available: int


class InsufficientStockError(StorefrontError):
    """Requested quantity exceeds available stock for one or more products."""
    def __init__(
        self, shortfalls: list[StockShortfall], context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.product_ids = [str(s.product_id) for s in shortfalls]
        details = "; ".join(
            f"{s.product_id} (requested {s.requested}, available {s.available})"
            for s in shortfalls
        )
        super().__init__(
            f"Insufficient stock: {details}",
            "INSUFFICIENT_STOCK", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.shortfalls = list(shortfalls)


class DuplicateResourceError(StorefrontError):
    """Unique field already taken by another resource."""
    def __init__(
        self, resource_type: str, field: str, value: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} with {field} '{value}' already exists",
            "DUPLICATE_RESOURCE", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.field = field


class ResourceInUseError(StorefrontError):
    """Resource cannot be deleted while other records reference it."""
    def __init__(
        self, resource_type: str, resource_id: str, referenced_by: str,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{resource_type} '{resource_id}' is referenced by existing {referenced_by}",
            "RESOURCE_IN_USE", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class TransactionConflictError(StorefrontError):
    """Atomic write phase could not commit. Retryable by the caller."""
    def __init__(
        self, product_id: UUID, requested: int, context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.product_ids = [str(product_id)]
        super().__init__(
            f"Stock for product '{product_id}' changed before {requested} "
            f"unit(s) could be reserved. Retry the order.",
            "TRANSACTION_CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, ctx, 409,
        )
        self.product_id = product_id
        self.requested = requested


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageError(StorefrontError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "STORAGE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
