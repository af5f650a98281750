"""Domain models for the inventory engine."""

from inventory_engine.models.category import Category
from inventory_engine.models.product import Product
from inventory_engine.models.transaction import Transaction, TransactionType
from inventory_engine.models.user import User

__all__ = [
    "Category",
    "Product",
    "Transaction",
    "TransactionType",
    "User",
]
