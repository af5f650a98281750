"""Pure domain layer: clock, DTOs, partial updates, input validation."""

from inventory_engine.domain.clock import Clock, DeterministicClock, SystemClock
from inventory_engine.domain.dtos import (
    InventoryValuation,
    OperationResult,
    ProductInfo,
    ProductPage,
    StockAdjustment,
    TransactionInfo,
)
from inventory_engine.domain.updates import UNSET, ProductUpdate

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "InventoryValuation",
    "OperationResult",
    "ProductInfo",
    "ProductPage",
    "StockAdjustment",
    "TransactionInfo",
    "ProductUpdate",
    "UNSET",
]
