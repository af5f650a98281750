"""
Input validation for engine operations.

Every check here is pure: no session, no I/O.  Services call these before
opening a unit of work, so malformed input never costs a pooled connection.
Each validator either returns normalized values or raises ValidationError
whose ``field_errors`` lists every problem found.

``None`` means "missing".  Zero is a value: a stock of 0 is valid, a price
of 0 is valid.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any

from inventory_engine.db.types import PRICE_LIMIT, round_money
from inventory_engine.domain.updates import ProductUpdate
from inventory_engine.exceptions import ValidationError
from inventory_engine.models.transaction import TransactionType


def _raise_if(errors: list[str]) -> None:
    if errors:
        raise ValidationError("; ".join(errors), errors)


def _is_int(value: Any) -> bool:
    # bool is an int subclass; True is not a quantity
    return isinstance(value, int) and not isinstance(value, bool)


def _to_price(value: Any, errors: list[str]) -> Decimal | None:
    if isinstance(value, bool):
        errors.append("Price must be a number")
        return None
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError):
        errors.append("Price must be a number")
        return None
    if not price.is_finite():
        errors.append("Price must be a number")
        return None
    if price < 0:
        errors.append("Price cannot be negative")
        return None
    if price >= PRICE_LIMIT or round_money(price) >= PRICE_LIMIT:
        errors.append("Price out of range")
        return None
    return round_money(price)


def parse_transaction_type(value: Any) -> TransactionType:
    """Map 'purchase' / 'sale' onto TransactionType."""
    try:
        return TransactionType(value)
    except ValueError:
        raise ValidationError(
            f"Invalid transaction type: {value!r} (expected 'purchase' or 'sale')",
            ["type"],
        ) from None


@dataclass(frozen=True)
class NewProduct:
    """Validated, normalized fields for a product insert."""

    name: str
    description: str | None
    price: Decimal
    stock: int
    category_id: int


def validate_new_product(
    name: Any,
    description: Any,
    price: Any,
    stock: Any,
    category_id: Any,
) -> NewProduct:
    """
    Check the fields of a product to be created.

    Raises:
        ValidationError: name empty/absent, price/stock/category_id absent,
            negative price or stock, or a value of the wrong type.
    """
    errors: list[str] = []

    if name is None or (isinstance(name, str) and not name.strip()):
        errors.append("Name is required")
    elif not isinstance(name, str):
        errors.append("Name must be a string")

    if description is not None and not isinstance(description, str):
        errors.append("Description must be a string")

    normalized_price = None
    if price is None:
        errors.append("Price is required")
    else:
        normalized_price = _to_price(price, errors)

    if stock is None:
        errors.append("Stock is required")
    elif not _is_int(stock):
        errors.append("Stock must be an integer")
    elif stock < 0:
        errors.append("Stock cannot be negative")

    if category_id is None:
        errors.append("Category ID is required")
    elif not _is_int(category_id):
        errors.append("Category ID must be an integer")

    _raise_if(errors)
    return NewProduct(
        name=name,
        description=description or None,
        price=normalized_price,
        stock=stock,
        category_id=category_id,
    )


def validate_product_update(update: ProductUpdate) -> dict[str, Any]:
    """
    Check a partial update and return the column values to write.

    Raises:
        ValidationError: nothing to update, or a supplied field is invalid.
            description may be set to None or "" (cleared); name, price and
            category_id may not.
    """
    changes = update.present()
    if not changes:
        raise ValidationError("No fields to update", [])

    errors: list[str] = []
    values: dict[str, Any] = {}

    if "name" in changes:
        name = changes["name"]
        if not isinstance(name, str) or not name.strip():
            errors.append("Name cannot be empty")
        else:
            values["name"] = name

    if "description" in changes:
        description = changes["description"]
        if description is not None and not isinstance(description, str):
            errors.append("Description must be a string")
        else:
            values["description"] = description

    if "price" in changes:
        if changes["price"] is None:
            errors.append("Price cannot be null")
        else:
            price = _to_price(changes["price"], errors)
            if price is not None:
                values["price"] = price

    if "category_id" in changes:
        category_id = changes["category_id"]
        if category_id is None:
            errors.append("Category ID cannot be null")
        elif not _is_int(category_id):
            errors.append("Category ID must be an integer")
        else:
            values["category_id"] = category_id

    _raise_if(errors)
    return values


@dataclass(frozen=True)
class TransactionRequest:
    """Validated request to record a ledger transaction."""

    product_id: int
    quantity: int
    transaction_type: TransactionType
    user_id: int


def validate_transaction_request(
    product_id: Any,
    quantity: Any,
    transaction_type: Any,
    user_id: Any,
) -> TransactionRequest:
    """
    Check a transaction before any store access.

    Raises:
        ValidationError: listing the missing fields, or for a non-positive
            quantity, unknown type, or non-integer ids.
    """
    supplied = {
        "productId": product_id,
        "quantity": quantity,
        "type": transaction_type,
        "userId": user_id,
    }
    missing = [key for key, value in supplied.items() if value is None]
    if missing:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing)}", missing
        )

    errors: list[str] = []
    if not _is_int(product_id):
        errors.append("Product ID must be an integer")
    if not _is_int(user_id):
        errors.append("User ID must be an integer")
    if not _is_int(quantity):
        errors.append("Quantity must be an integer")
    elif quantity <= 0:
        errors.append("Quantity must be greater than 0")
    _raise_if(errors)

    return TransactionRequest(
        product_id=product_id,
        quantity=quantity,
        transaction_type=parse_transaction_type(transaction_type),
        user_id=user_id,
    )


def validate_stock_adjustment(
    product_id: Any,
    quantity_delta: Any,
    transaction_type: Any,
) -> TransactionType:
    """
    Check a direct stock adjustment.

    A purchase applies its delta unconditionally.  A sale rejects a negative
    delta; it is NOT compared against current stock here.

    Raises:
        ValidationError: unknown type, non-integer values, or a negative
            sale delta.
    """
    kind = parse_transaction_type(transaction_type)

    errors: list[str] = []
    if not _is_int(product_id):
        errors.append("Product ID must be an integer")
    if not _is_int(quantity_delta):
        errors.append("Stock must be an integer")
    elif kind is TransactionType.SALE and quantity_delta < 0:
        errors.append("Stock cannot be negative")
    _raise_if(errors)
    return kind


def validate_page(page: Any, limit: Any) -> tuple[int, int]:
    """Page is 1-based; limit must be positive."""
    errors: list[str] = []
    if not _is_int(page) or page < 1:
        errors.append("Page must be an integer >= 1")
    if not _is_int(limit) or limit < 1:
        errors.append("Limit must be an integer > 0")
    _raise_if(errors)
    return page, limit


def validate_threshold(threshold: Any) -> int:
    if not _is_int(threshold):
        raise ValidationError("Threshold must be an integer", ["threshold"])
    return threshold
