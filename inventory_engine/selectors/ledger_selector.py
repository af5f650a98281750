"""
Module: inventory_engine.selectors.ledger_selector
Responsibility: Per-product transaction history.

History is read straight from the ledger rows, joined to the product and the
user for display names, newest first.  Ties on transaction_date fall back
to id so the order is stable.
"""

from sqlalchemy import func, select

from inventory_engine.domain.dtos import TransactionInfo
from inventory_engine.models.product import Product
from inventory_engine.models.transaction import Transaction
from inventory_engine.models.user import User
from inventory_engine.selectors.base import BaseSelector


class LedgerSelector(BaseSelector):
    """Read-only ledger queries."""

    def product_history(self, product_id: int) -> list[TransactionInfo]:
        """
        All transactions for a product, most recent first.

        Returns an empty list (not an error) for a product with no
        transactions or an unknown product id.
        """
        rows = self.session.execute(
            select(Transaction, Product.name, User.name)
            .join(Product, Transaction.product_id == Product.id)
            .join(User, Transaction.user_id == User.id)
            .where(Transaction.product_id == product_id)
            .order_by(Transaction.transaction_date.desc(), Transaction.id.desc())
        ).all()

        return [
            TransactionInfo(
                id=entry.id,
                product_id=entry.product_id,
                quantity=entry.quantity,
                type=entry.transaction_type,
                user_id=entry.user_id,
                transaction_date=entry.transaction_date,
                product_name=product_name,
                user_name=user_name,
            )
            for entry, product_name, user_name in rows
        ]

    def count_for_product(self, product_id: int) -> int:
        """Number of ledger rows for a product."""
        return self.session.execute(
            select(func.count())
            .select_from(Transaction)
            .where(Transaction.product_id == product_id)
        ).scalar_one()
