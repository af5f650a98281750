"""
Module: inventory_engine.models.user
Responsibility: ORM persistence for the users who record transactions.
Architecture position: Engine > Models.  May import from db/ only.

User management lives outside the engine.  This table exists so that every
ledger row can reference who recorded it (foreign key) and product history
can show the user's name.
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from inventory_engine.db.base import Base


class User(Base):
    """Person or system account that records purchases and sales."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<User {self.id}: {self.name}>"
