"""
BaseService -- abstract base for the engine's write-side services.

Responsibility:
    Provides the common constructor and session-handling contract for every
    service that mutates products or the ledger.  Services receive a
    SQLAlchemy ``Session`` and use ``session.flush()`` -- never
    ``session.commit()``.  The caller (InventoryService) owns the unit of
    work and decides commit or rollback.

Invariants enforced:
    - Flush only: a service never commits or rolls back, so a multi-step
      mutation (ledger insert + stock update) stays one atomic unit.
    - Row lock before stock reads: ``_lock_product`` issues
      ``SELECT ... FOR UPDATE`` and refreshes the identity map, so the stock
      value a service computes from is the committed value and no other
      writer can change it until this unit of work ends.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.orm import Session

from inventory_engine.db.base import Base
from inventory_engine.domain.dtos import ProductInfo
from inventory_engine.exceptions import ProductNotFoundError
from inventory_engine.models.product import Product

ModelType = TypeVar("ModelType", bound=Base)


class BaseService(ABC, Generic[ModelType]):
    """
    Abstract base class for write-side services.

    Non-goals:
        - Does NOT manage transaction lifecycle (commit/rollback).
        - Does NOT provide query-only methods -- those belong in
          ``inventory_engine/selectors/``.
    """

    def __init__(self, session: Session):
        self.session = session

    def _lock_product(self, product_id: int) -> Product:
        """
        Load a product with a row-level lock held until the unit of work ends.

        Raises:
            ProductNotFoundError: If no product has this id.
        """
        product = self.session.execute(
            select(Product)
            .where(Product.id == product_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        ).scalar_one_or_none()

        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    @staticmethod
    def _product_to_dto(product: Product) -> ProductInfo:
        return ProductInfo(
            id=product.id,
            name=product.name,
            description=product.description,
            price=product.price,
            stock=product.stock,
            category_id=product.category_id,
        )
