"""
LedgerService -- records purchases and sales and moves stock with them.

Responsibility:
    Appends one Transaction row and applies the matching stock change to its
    product, both inside the caller's unit of work.

Invariants enforced:
    - The product row is locked (SELECT ... FOR UPDATE) before its stock is
      read, so two concurrent sales on the same product are serialized and
      neither can act on a stale balance.
    - A sale whose quantity exceeds the stock on hand is rejected with
      InsufficientStockError BEFORE anything is written.
    - The ledger row and the stock update are flushed in the same
      transaction; the caller's commit publishes both or neither.
    - previous_stock / new_stock in the result are computed from the locked
      read, so new_stock always equals the persisted stock after commit.

Failure modes:
    - ProductNotFoundError: product id does not exist.
    - InsufficientStockError: sale quantity > stock.
    - IntegrityError (from flush): user id does not exist.  The caller
      rolls back; nothing written here survives.
"""

from sqlalchemy.orm import Session

from inventory_engine.domain.clock import Clock
from inventory_engine.domain.dtos import TransactionInfo
from inventory_engine.domain.validation import TransactionRequest
from inventory_engine.exceptions import InsufficientStockError
from inventory_engine.logging_config import get_logger
from inventory_engine.models.transaction import Transaction, TransactionType
from inventory_engine.services.base import BaseService

logger = get_logger("services.ledger")


class LedgerService(BaseService[Transaction]):
    """
    Writes the stock ledger.

    Non-goals:
        - Does NOT call ``session.commit()`` -- caller controls boundaries.
        - Does NOT update or delete ledger rows; the ledger is append-only.
    """

    def __init__(self, session: Session, clock: Clock):
        super().__init__(session)
        self._clock = clock

    def record(self, request: TransactionRequest) -> TransactionInfo:
        """
        Record a purchase or sale and apply it to stock.

        Preconditions:
            - ``request`` produced by ``validate_transaction_request``.

        Postconditions:
            - One Transaction row flushed with transaction_date = clock.now().
            - Product.stock changed by +quantity (purchase) or -quantity (sale).

        Raises:
            ProductNotFoundError, InsufficientStockError.
        """
        product = self._lock_product(request.product_id)
        previous_stock = product.stock

        if (
            request.transaction_type is TransactionType.SALE
            and previous_stock < request.quantity
        ):
            logger.info(
                "insufficient_stock",
                extra={
                    "product_id": product.id,
                    "requested": request.quantity,
                    "available": previous_stock,
                },
            )
            raise InsufficientStockError(
                product_id=product.id,
                product_name=product.name,
                requested=request.quantity,
                available=previous_stock,
            )

        entry = Transaction(
            product_id=product.id,
            quantity=request.quantity,
            transaction_type=request.transaction_type.value,
            user_id=request.user_id,
            transaction_date=self._clock.now(),
        )
        self.session.add(entry)

        if request.transaction_type is TransactionType.PURCHASE:
            new_stock = previous_stock + request.quantity
        else:
            new_stock = previous_stock - request.quantity
        product.stock = new_stock

        # INVARIANT: ledger row and stock change flush together
        self.session.flush()

        logger.info(
            "transaction_recorded",
            extra={
                "transaction_id": entry.id,
                "product_id": product.id,
                "transaction_type": request.transaction_type.value,
                "quantity": request.quantity,
                "previous_stock": previous_stock,
                "new_stock": new_stock,
            },
        )
        return TransactionInfo(
            id=entry.id,
            product_id=entry.product_id,
            quantity=entry.quantity,
            type=entry.transaction_type,
            user_id=entry.user_id,
            transaction_date=entry.transaction_date,
            previous_stock=previous_stock,
            new_stock=new_stock,
        )
