"""
Module: inventory_engine.db.base
Responsibility: Declarative base classes for all SQLAlchemy ORM models.  Provides
    the integer primary key convention, the type annotation map for consistent
    column types, and the TrackedBase mixin for row timestamps.
Architecture position: Engine > DB.  This is the lowest-level import target
    within the engine.  ALL model files import from here.  This module MUST NOT
    import from models/, services/, selectors/, domain/, or outer layers.

Invariants enforced:
    - Store-assigned integer keys: every model gets an autoincrementing id.
      Callers address products by numeric id, so UUIDs are not used.
    - Decimal precision: Decimal maps to Numeric(12, 2).  NEVER use float
      for prices.
    - Timestamps are timezone-aware.
"""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar

from sqlalchemy import BigInteger, DateTime, Integer, Numeric, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# SQLite only autoincrements a column declared exactly INTEGER PRIMARY KEY.
Identifier = BigInteger().with_variant(Integer(), "sqlite")


class Base(DeclarativeBase):
    """
    Declarative base for all SQLAlchemy models.

    Contract:
        Every ORM model in the engine inherits from Base (or TrackedBase).
        Base provides an integer primary key and a type_annotation_map that
        keeps column types consistent across the schema.

    Guarantees:
        - id is assigned by the store on INSERT (autoincrement).
        - Decimal maps to Numeric(12, 2).
        - datetime maps to DateTime(timezone=True).
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(12, 2),
        datetime: DateTime(timezone=True),
        int: Identifier,
    }

    id: Mapped[int] = mapped_column(
        Identifier,
        primary_key=True,
        autoincrement=True,
    )


class TrackedBase(Base):
    """
    Abstract base with row creation and modification timestamps.

    Guarantees:
        - created_at is set to server NOW() on INSERT and never changes.
        - updated_at is set on INSERT and refreshed on every UPDATE.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
