"""Selectors for the inventory engine (read side)."""

from inventory_engine.selectors.catalog_selector import CatalogSelector
from inventory_engine.selectors.ledger_selector import LedgerSelector
from inventory_engine.selectors.report_selector import ReportSelector

__all__ = [
    "CatalogSelector",
    "LedgerSelector",
    "ReportSelector",
]
