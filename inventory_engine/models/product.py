"""
Module: inventory_engine.models.product
Responsibility: ORM persistence for products and their running stock balance.
Architecture position: Engine > Models.  May import from db/ only.
    MUST NOT import from services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - price >= 0 (ck_product_price_non_negative, also validated upstream).
    - stock is the authoritative running balance.  It is never recomputed
      from the ledger at read time.  It is only written by StockService and
      LedgerService, always under a row lock.
    - No CHECK constraint on stock: LedgerService refuses sales that would
      go below zero, while StockService.adjust may record a negative balance.

Failure modes:
    - IntegrityError on a category_id that does not reference a category.
    - IntegrityError on a negative price that bypassed validation.
"""

from decimal import Decimal

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from inventory_engine.db.base import Identifier, TrackedBase


class Product(TrackedBase):
    """
    A stocked item.

    Contract:
        Created through ProductService.create_product; descriptive fields
        change through ProductService.update_product; stock changes only
        through StockService.adjust and LedgerService.record.
        Products are never hard-deleted.
    """

    __tablename__ = "products"

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
        Index("idx_product_category", "category_id"),
        Index("idx_product_stock", "stock"),
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    description: Mapped[str | None] = mapped_column(
        String(4000),
        nullable=True,
    )

    price: Mapped[Decimal] = mapped_column(
        nullable=False,
    )

    stock: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
    )

    category_id: Mapped[int] = mapped_column(
        Identifier,
        ForeignKey("categories.id"),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Product {self.id}: {self.name} (stock={self.stock})>"
