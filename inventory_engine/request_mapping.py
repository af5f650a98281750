"""
Request-body mapping for the HTTP collaborator.

The HTTP layer parses JSON and owns routes and status codes.  What it hands
the engine is a decoded body; these functions turn those bodies into typed
InventoryService calls, so the body conventions (camelCase keys, the
``transaction`` wrapper, the stock-update shape on PUT) live in one place.

A body that is not a JSON object is rejected with ValidationError.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from inventory_engine.domain.dtos import OperationResult
from inventory_engine.domain.updates import ProductUpdate
from inventory_engine.exceptions import ValidationError
from inventory_engine.services.inventory_service import InventoryService


def _require_mapping(body: Any) -> Mapping[str, Any]:
    if not isinstance(body, Mapping):
        raise ValidationError("Invalid JSON body", ["body"])
    return body


def create_product_from_body(service: InventoryService, body: Any) -> OperationResult:
    """POST /products: {name, description?, price, stock, categoryId}."""
    body = _require_mapping(body)
    return service.create_product(
        name=body.get("name"),
        description=body.get("description"),
        price=body.get("price"),
        stock=body.get("stock"),
        category_id=body.get("categoryId"),
    )


def is_stock_update(body: Mapping[str, Any]) -> bool:
    """A PUT body of the form {product: {...}, transactionType} adjusts stock."""
    return bool(body.get("product")) and bool(body.get("transactionType"))


def update_product_from_body(
    service: InventoryService,
    product_id: int,
    body: Any,
) -> OperationResult:
    """
    PUT /products/<id>.

    ``{"product": {"id", "stock"}, "transactionType"}`` routes to
    adjust_stock with ``product.stock`` as the delta; the product id in the
    body wins over the path id when present.  Any other body is a partial
    product update built from the keys it contains.
    """
    body = _require_mapping(body)

    if is_stock_update(body):
        product = _require_mapping(body["product"])
        return service.adjust_stock(
            product_id=product.get("id", product_id),
            quantity_delta=product.get("stock"),
            transaction_type=body["transactionType"],
        )

    return service.update_product(product_id, ProductUpdate.from_body(body))


def record_transaction_from_body(service: InventoryService, body: Any) -> OperationResult:
    """POST /transactions: {"transaction": {productId, quantity, type, userId}}."""
    body = _require_mapping(body)
    transaction = body.get("transaction")
    if not transaction:
        raise ValidationError("Invalid JSON body", ["transaction"])
    transaction = _require_mapping(transaction)
    return service.record_transaction(
        product_id=transaction.get("productId"),
        quantity=transaction.get("quantity"),
        transaction_type=transaction.get("type"),
        user_id=transaction.get("userId"),
    )
