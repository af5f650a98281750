"""Services for the inventory engine (write side and the public facade)."""

from inventory_engine.services.inventory_service import InventoryService
from inventory_engine.services.ledger_service import LedgerService
from inventory_engine.services.product_service import ProductService
from inventory_engine.services.reference_data import ReferenceDataLoader
from inventory_engine.services.stock_service import StockService

__all__ = [
    "InventoryService",
    "LedgerService",
    "ProductService",
    "ReferenceDataLoader",
    "StockService",
]
