"""
Module: inventory_engine.models.category
Responsibility: ORM persistence for product categories.
Architecture position: Engine > Models.  May import from db/ only.

Categories are reference data: ReferenceDataLoader creates them by name for
setup, and nothing renames or deletes them.  Products reference a category
by id and catalog queries join on the category name.
"""

from sqlalchemy import String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from inventory_engine.db.base import Base


class Category(Base):
    """Named grouping of products."""

    __tablename__ = "categories"

    __table_args__ = (
        UniqueConstraint("name", name="uq_category_name"),
    )

    name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Category {self.id}: {self.name}>"
