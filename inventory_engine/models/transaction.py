"""
Module: inventory_engine.models.transaction
Responsibility: ORM persistence for the stock ledger: one row per purchase or
    sale recorded against a product.
Architecture position: Engine > Models.  May import from db/ only.

Invariants enforced:
    - Append-only: rows are inserted by LedgerService.record and never
      updated or deleted.
    - quantity > 0 (ck_transaction_quantity_positive).
    - transaction_type is 'purchase' or 'sale' (ck_transaction_type).
    - A ledger row and the matching stock change on its product are written
      in the same unit of work; neither is ever visible without the other.

Failure modes:
    - IntegrityError on a product_id or user_id that does not exist.

previous/new stock are not stored.  They are computed at creation time and
returned in the response only.
"""

from datetime import datetime
from enum import Enum

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from inventory_engine.db.base import Base, Identifier


class TransactionType(str, Enum):
    """Direction of a stock movement."""

    PURCHASE = "purchase"  # stock in
    SALE = "sale"  # stock out


class Transaction(Base):
    """A single immutable stock movement."""

    __tablename__ = "transactions"

    __table_args__ = (
        CheckConstraint("quantity > 0", name="ck_transaction_quantity_positive"),
        CheckConstraint(
            "transaction_type IN ('purchase', 'sale')",
            name="ck_transaction_type",
        ),
        Index("idx_transaction_product_date", "product_id", "transaction_date"),
    )

    product_id: Mapped[int] = mapped_column(
        Identifier,
        ForeignKey("products.id"),
        nullable=False,
    )

    quantity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
    )

    transaction_type: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
    )

    user_id: Mapped[int] = mapped_column(
        Identifier,
        ForeignKey("users.id"),
        nullable=False,
    )

    transaction_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
    )

    def __repr__(self) -> str:
        return (
            f"<Transaction {self.id}: {self.transaction_type} "
            f"{self.quantity} of product {self.product_id}>"
        )
