"""
StockService -- direct stock adjustments without a ledger row.

Responsibility:
    Moves a product's stock by a delta for a purchase (in) or sale (out).
    This is the "force adjustment" path: unlike LedgerService.record it does
    not compare a sale against the stock on hand and writes no Transaction
    row.

Invariants enforced:
    - Read-then-write of stock happens under the product row lock.
    - A purchase applies its delta unconditionally.  A sale subtracts its
      delta without checking the result; a result below zero is applied and
      logged as ``stock_forced_negative`` at WARNING.

Failure modes:
    - ProductNotFoundError: product id does not exist.
"""

from inventory_engine.domain.dtos import StockAdjustment
from inventory_engine.logging_config import get_logger
from inventory_engine.models.product import Product
from inventory_engine.models.transaction import TransactionType
from inventory_engine.services.base import BaseService

logger = get_logger("services.stock")


class StockService(BaseService[Product]):
    """Applies stock deltas under a row lock. Caller controls commit."""

    def adjust(
        self,
        product_id: int,
        quantity_delta: int,
        transaction_type: TransactionType,
    ) -> StockAdjustment:
        """
        Add (purchase) or subtract (sale) ``quantity_delta`` from stock.

        Preconditions:
            - Inputs validated by ``validate_stock_adjustment``.

        Returns:
            StockAdjustment with the stock before and after.
        """
        product = self._lock_product(product_id)
        previous_stock = product.stock

        if transaction_type is TransactionType.PURCHASE:
            new_stock = previous_stock + quantity_delta
        else:
            new_stock = previous_stock - quantity_delta

        if new_stock < 0:
            logger.warning(
                "stock_forced_negative",
                extra={
                    "transaction_type": transaction_type.value,
                    "previous_stock": previous_stock,
                    "new_stock": new_stock,
                },
            )

        product.stock = new_stock
        self.session.flush()

        logger.info(
            "stock_adjusted",
            extra={
                "transaction_type": transaction_type.value,
                "quantity_delta": quantity_delta,
                "previous_stock": previous_stock,
                "new_stock": new_stock,
            },
        )
        return StockAdjustment(
            product_id=product_id,
            transaction_type=transaction_type.value,
            quantity_delta=quantity_delta,
            previous_stock=previous_stock,
            new_stock=new_stock,
        )
