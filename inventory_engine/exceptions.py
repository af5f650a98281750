"""
Typed Exception Hierarchy for the Inventory Engine.

Every failure the engine reports is a typed exception with a class-level
``code`` (machine-readable, API-safe) and structured attributes carrying the
diagnostic context.  Callers catch by type and read attributes; they never
parse messages.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    InventoryEngineError (base)
    |
    +-- ValidationError          bad, missing, or out-of-range input
    |
    +-- NotFoundError
    |   +-- ProductNotFoundError
    |
    +-- InsufficientStockError   sale would drive stock below zero
    |
    +-- StoreError               connectivity / query failure, cause wrapped

===============================================================================
ERROR CODES
===============================================================================

Code                 | When Raised
---------------------|-------------------------------------------------------
VALIDATION_ERROR     | Missing field, negative price/stock, bad type, empty update
NOT_FOUND            | Referenced entity absent
PRODUCT_NOT_FOUND    | Product id does not exist
INSUFFICIENT_STOCK   | Sale quantity exceeds available stock
STORE_ERROR          | SQLAlchemy failure (integrity, pool timeout, connection)

===============================================================================
HANDLING PATTERNS
===============================================================================

    try:
        service.record_transaction(product_id, 10, "sale", user_id)
    except InsufficientStockError as e:
        notify(f"Only {e.available} of {e.product_name} left")
    except ValidationError as e:
        return {"error": e.code, "fields": e.field_errors}

Business errors (ValidationError, NotFoundError, InsufficientStockError) are
never wrapped.  StoreError always chains the original exception via
``raise ... from`` so the cause survives in tracebacks and logs.

No error is retried automatically: a failed unit of work is rolled back and
reported, leaving state exactly as before the call.
"""


class InventoryEngineError(Exception):
    """
    Base exception for all inventory engine errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "INVENTORY_ENGINE_ERROR"


class ValidationError(InventoryEngineError):
    """Caller supplied missing, malformed, or out-of-range input."""

    code: str = "VALIDATION_ERROR"

    def __init__(self, message: str, field_errors: list[str] | None = None):
        self.field_errors = list(field_errors or [])
        super().__init__(message)


class NotFoundError(InventoryEngineError):
    """Referenced entity does not exist."""

    code: str = "NOT_FOUND"


class ProductNotFoundError(NotFoundError):
    """Product with given ID was not found."""

    code: str = "PRODUCT_NOT_FOUND"

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product with ID {product_id} not found")


class InsufficientStockError(InventoryEngineError):
    """
    A sale would drive the product's stock below zero.

    Carries the product, the requested quantity and what is available so the
    caller can report it without a second read.
    """

    code: str = "INSUFFICIENT_STOCK"

    def __init__(
        self,
        product_id: int,
        product_name: str,
        requested: int,
        available: int,
    ):
        self.product_id = product_id
        self.product_name = product_name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for {product_name}. "
            f"Requested: {requested}, Available: {available}"
        )


class StoreError(InventoryEngineError):
    """
    The underlying store failed (query error, constraint violation, pool
    exhaustion, lost connection).

    The message names the operation and preserves the original cause:
    ``Failed to create transaction: <cause>``.
    """

    code: str = "STORE_ERROR"

    def __init__(self, operation: str, cause: Exception):
        self.operation = operation
        self.cause = str(cause)
        super().__init__(f"Failed to {operation}: {cause}")
