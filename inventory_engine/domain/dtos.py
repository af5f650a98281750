"""
DTOs -- immutable results returned by services and selectors.

Services and selectors never hand ORM rows to callers.  Each operation
returns one of these frozen dataclasses, wrapped in an ``OperationResult``
envelope.  ``to_dict()`` renders the JSON-shaped form the HTTP collaborator
sends back, with camelCase keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def render(value: Any) -> Any:
    """Render DTOs (and lists of them) into plain dicts with camelCase keys."""
    if is_dataclass(value) and not isinstance(value, type):
        return {
            _camel(f.name): render(getattr(value, f.name))
            for f in fields(value)
            if not (f.metadata.get("omit_none") and getattr(value, f.name) is None)
        }
    if isinstance(value, (list, tuple)):
        return [render(v) for v in value]
    return value


def _optional():
    return field(default=None, metadata={"omit_none": True})


@dataclass(frozen=True)
class ProductInfo:
    """Product as seen by callers; category_name only on joined queries."""

    id: int
    name: str
    description: str | None
    price: Decimal
    stock: int
    category_id: int
    category_name: str | None = _optional()

    def to_dict(self) -> dict[str, Any]:
        return render(self)


@dataclass(frozen=True)
class TransactionInfo:
    """
    A ledger row.

    previous_stock/new_stock are filled in only on the response to
    recording; product_name/user_name only on history queries.
    """

    id: int
    product_id: int
    quantity: int
    type: str
    user_id: int
    transaction_date: datetime
    previous_stock: int | None = _optional()
    new_stock: int | None = _optional()
    product_name: str | None = _optional()
    user_name: str | None = _optional()

    def to_dict(self) -> dict[str, Any]:
        return render(self)


@dataclass(frozen=True)
class StockAdjustment:
    """Outcome of a direct stock adjustment (no ledger row)."""

    product_id: int
    transaction_type: str
    quantity_delta: int
    previous_stock: int
    new_stock: int

    def to_dict(self) -> dict[str, Any]:
        return render(self)


@dataclass(frozen=True)
class ProductPage:
    """One page of the catalog."""

    items: list[ProductInfo]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        # ceil(total / limit) without floats
        return -(-self.total // self.limit)


@dataclass(frozen=True)
class InventoryValuation:
    """Sum of price x stock over the catalog."""

    total_value: Decimal
    currency: str

    def to_dict(self) -> dict[str, Any]:
        return render(self)


@dataclass(frozen=True)
class OperationResult:
    """
    Success envelope returned by every InventoryService operation.

    ``meta`` carries operation-specific siblings of ``data`` (page counts,
    the threshold used, the category filtered on).
    """

    data: Any
    message: str | None = None
    meta: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"data": render(self.data)}
        if self.message is not None:
            payload["message"] = self.message
        payload.update(self.meta)
        return payload
