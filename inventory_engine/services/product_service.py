"""
Service layer for product catalog writes.

Creates products and applies partial updates to their descriptive fields.
Stock is only ever set here at creation time; afterwards it belongs to
StockService and LedgerService.
"""

from __future__ import annotations

from typing import Any

from inventory_engine.domain.dtos import ProductInfo
from inventory_engine.domain.validation import NewProduct
from inventory_engine.logging_config import get_logger
from inventory_engine.models.product import Product
from inventory_engine.services.base import BaseService

logger = get_logger("services.product")


class ProductService(BaseService[Product]):
    """
    Inserts and updates product rows.

    Inputs arrive already validated (see ``domain/validation.py``); this
    service only touches the store.  All public methods return ProductInfo
    DTOs, not ORM entities.
    """

    def create_product(self, new: NewProduct) -> ProductInfo:
        """
        Insert one product row.

        Returns:
            The created product including its store-assigned id.
        """
        product = Product(
            name=new.name,
            description=new.description,
            price=new.price,
            stock=new.stock,
            category_id=new.category_id,
        )
        self.session.add(product)
        self.session.flush()

        logger.info(
            "product_created",
            extra={
                "product_id": product.id,
                "category_id": product.category_id,
                "stock": product.stock,
            },
        )
        return self._product_to_dto(product)

    def update_product(self, product_id: int, values: dict[str, Any]) -> ProductInfo:
        """
        Apply validated column values to an existing product.

        The row is locked first so a concurrent update cannot interleave.

        Raises:
            ProductNotFoundError: If product doesn't exist.
        """
        product = self._lock_product(product_id)

        for column, value in values.items():
            setattr(product, column, value)

        self.session.flush()
        logger.info(
            "product_updated",
            extra={"product_id": product_id, "fields": sorted(values)},
        )
        return self._product_to_dto(product)
