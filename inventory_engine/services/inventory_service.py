"""
InventoryService -- the engine's public operations.

Responsibility:
    The single entry point callers (HTTP layer, CLI, tests) use.  Each
    public method is one operation: validate input, open one unit of work
    drawn from the injected session factory, run the write service or
    selector inside it, commit or roll back, and return an OperationResult.

Architecture position:
    Engine > Services -- the orchestration shell.  Owns transaction
    boundaries; ProductService, StockService and LedgerService only flush.

Invariants enforced:
    - Validation happens before a pooled connection is taken.
    - One unit of work per operation.  On ANY exception inside it the
      session is rolled back, so nothing an operation wrote is observable
      after a failure.
    - The session (and its pooled connection) is released on every exit
      path: success, business-rule failure, or store error.
    - No retries.  Business errors propagate as raised; SQLAlchemy errors
      are wrapped in StoreError naming the operation, chained to the cause.

Failure modes:
    - ValidationError, ProductNotFoundError, InsufficientStockError.
    - StoreError: integrity violations (unknown category/user), pool
      timeout, lost connection, any other SQLAlchemyError.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from inventory_engine.config import EngineConfig
from inventory_engine.db.engine import session_scope
from inventory_engine.domain.clock import Clock, SystemClock
from inventory_engine.domain.dtos import OperationResult
from inventory_engine.domain.updates import ProductUpdate
from inventory_engine.domain.validation import (
    validate_new_product,
    validate_page,
    validate_product_update,
    validate_stock_adjustment,
    validate_threshold,
    validate_transaction_request,
)
from inventory_engine.exceptions import InventoryEngineError, StoreError
from inventory_engine.logging_config import LogContext, get_logger
from inventory_engine.selectors.catalog_selector import CatalogSelector
from inventory_engine.selectors.ledger_selector import LedgerSelector
from inventory_engine.selectors.report_selector import ReportSelector
from inventory_engine.services.ledger_service import LedgerService
from inventory_engine.services.product_service import ProductService
from inventory_engine.services.reference_data import ReferenceDataLoader
from inventory_engine.services.stock_service import StockService

logger = get_logger("services.inventory")


class InventoryService:
    """
    Atomic inventory operations over a pooled relational store.

    Contract:
        Constructed with a session factory bound to a bounded pool.  Safe to
        share across threads: it holds no session between calls, and every
        call draws its own.

    Usage:
        service = InventoryService(get_session_factory(), config=config)
        result = service.record_transaction(
            product_id=1, quantity=3, transaction_type="sale", user_id=1,
        )
        result.data.new_stock
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        clock: Clock | None = None,
        config: EngineConfig | None = None,
    ):
        self._session_factory = session_factory
        self._clock = clock or SystemClock()
        self._config = config or EngineConfig()

    @property
    def config(self) -> EngineConfig:
        return self._config

    @contextmanager
    def _unit_of_work(self, operation: str) -> Iterator[Session]:
        """
        One session, one transaction, released on every path.

        SQLAlchemy failures become StoreError("Failed to <operation>: ...").
        """
        try:
            with session_scope(self._session_factory) as session:
                yield session
        except InventoryEngineError:
            raise
        except SQLAlchemyError as exc:
            error = StoreError(operation, exc)
            logger.error("operation_failed", exc_info=error)
            raise error from exc

    # ------------------------------------------------------------------
    # Product catalog
    # ------------------------------------------------------------------

    def list_products(self, page: int = 1, limit: int | None = None) -> OperationResult:
        """
        A page of products in insertion order.

        Returns:
            data: list[ProductInfo]; meta: total, page, limit, totalPages.
        """
        if limit is None:
            limit = self._config.default_page_size
        page, limit = validate_page(page, limit)

        with LogContext.bind(operation="list_products"):
            with self._unit_of_work("get products") as session:
                result = CatalogSelector(session).list_page(page, limit)

        return OperationResult(
            data=result.items,
            meta={
                "total": result.total,
                "page": result.page,
                "limit": result.limit,
                "totalPages": result.total_pages,
            },
        )

    def list_products_by_category(self, category_name: str) -> OperationResult:
        """Products in the named category; an empty list if none match."""
        with LogContext.bind(operation="list_products_by_category"):
            with self._unit_of_work("get products by category") as session:
                products = CatalogSelector(session).list_by_category(category_name)

        return OperationResult(
            data=products,
            meta={"category": category_name, "total": len(products)},
        )

    def create_product(
        self,
        name: Any = None,
        description: Any = None,
        price: Any = None,
        stock: Any = None,
        category_id: Any = None,
    ) -> OperationResult:
        """
        Insert a product.

        Raises:
            ValidationError: missing name/price/stock/category_id or a
                negative price or stock.  No row is inserted.
            StoreError: e.g. category_id does not reference a category.
        """
        new = validate_new_product(name, description, price, stock, category_id)

        with LogContext.bind(operation="create_product"):
            with self._unit_of_work("add product") as session:
                product = ProductService(session).create_product(new)

        return OperationResult(data=product, message="Product added successfully")

    def update_product(self, product_id: int, update: ProductUpdate) -> OperationResult:
        """
        Change some of name, description, price, category_id.

        Fields not supplied in ``update`` are left untouched.

        Raises:
            ValidationError: empty update or an invalid supplied field.
            ProductNotFoundError: no product with ``product_id``.
            StoreError: the store rejected the write, e.g. an unknown category.
        """
        values = validate_product_update(update)

        with LogContext.bind(operation="update_product", product_id=product_id):
            with self._unit_of_work("update product") as session:
                product = ProductService(session).update_product(product_id, values)

        return OperationResult(data=product, message="Product updated successfully")

    # ------------------------------------------------------------------
    # Stock
    # ------------------------------------------------------------------

    def adjust_stock(
        self,
        product_id: int,
        quantity_delta: int,
        transaction_type: str,
    ) -> OperationResult:
        """
        Move stock directly without writing a ledger row.

        A sale here is not checked against stock on hand the way
        record_transaction checks it; a result below zero is applied and
        logged as ``stock_forced_negative``.

        Raises:
            ValidationError: unknown type or negative sale delta.
            ProductNotFoundError.
        """
        kind = validate_stock_adjustment(product_id, quantity_delta, transaction_type)

        with LogContext.bind(operation="adjust_stock", product_id=product_id):
            with self._unit_of_work("update stock") as session:
                adjustment = StockService(session).adjust(
                    product_id, quantity_delta, kind
                )

        return OperationResult(data=adjustment, message="Stock updated successfully")

    # ------------------------------------------------------------------
    # Ledger
    # ------------------------------------------------------------------

    def record_transaction(
        self,
        product_id: Any = None,
        quantity: Any = None,
        transaction_type: Any = None,
        user_id: Any = None,
    ) -> OperationResult:
        """
        Record a purchase or sale and apply it to stock atomically.

        Returns:
            data: TransactionInfo with previous_stock and new_stock.

        Raises:
            ValidationError: missing fields, quantity <= 0, unknown type.
            ProductNotFoundError: product does not exist.
            InsufficientStockError: sale exceeds stock; nothing written.
            StoreError: e.g. user_id does not exist; nothing written.
        """
        request = validate_transaction_request(
            product_id, quantity, transaction_type, user_id
        )

        with LogContext.bind(
            operation="record_transaction",
            product_id=request.product_id,
            actor_id=request.user_id,
        ):
            with self._unit_of_work("create transaction") as session:
                entry = LedgerService(session, self._clock).record(request)

        return OperationResult(data=entry, message="Transaction created successfully")

    def get_product_history(self, product_id: int) -> OperationResult:
        """Ledger rows for a product, newest first, with product and user names."""
        with LogContext.bind(operation="get_product_history", product_id=product_id):
            with self._unit_of_work("get product history") as session:
                history = LedgerSelector(session).product_history(product_id)

        return OperationResult(
            data=history,
            meta={"productId": product_id, "total": len(history)},
        )

    # ------------------------------------------------------------------
    # Reports
    # ------------------------------------------------------------------

    def get_inventory_value(self) -> OperationResult:
        with LogContext.bind(operation="get_inventory_value"):
            with self._unit_of_work("calculate inventory value") as session:
                valuation = ReportSelector(session).inventory_value(self._config.currency)

        return OperationResult(
            data=valuation,
            message="Inventory value calculated successfully",
        )

    def get_low_stock_products(self, threshold: int | None = None) -> OperationResult:
        """Products at or below ``threshold`` (config default 10), lowest first."""
        if threshold is None:
            threshold = self._config.low_stock_threshold
        threshold = validate_threshold(threshold)

        with LogContext.bind(operation="get_low_stock_products"):
            with self._unit_of_work("get low stock products") as session:
                products = ReportSelector(session).low_stock(threshold)

        return OperationResult(
            data=products,
            meta={"threshold": threshold, "total": len(products)},
        )

    # ------------------------------------------------------------------
    # Reference data
    # ------------------------------------------------------------------

    def load_reference_data(
        self,
        categories: Iterable[str] = (),
        users: Iterable[str] = (),
    ) -> OperationResult:
        """
        Make sure the named categories and users exist.

        Returns:
            data: {"categories": {name: id}, "users": {name: id}}
        """
        with LogContext.bind(operation="load_reference_data"):
            with self._unit_of_work("load reference data") as session:
                loader = ReferenceDataLoader(session)
                category_ids = {name: loader.ensure_category(name) for name in categories}
                user_ids = {name: loader.ensure_user(name) for name in users}

        return OperationResult(
            data={"categories": category_ids, "users": user_ids},
            message="Reference data loaded",
        )
