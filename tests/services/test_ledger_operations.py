"""
Tests for record_transaction and get_product_history.

Covers the stock ledger contract: every recorded transaction moves stock by
exactly its quantity in the same unit of work, and a rejected transaction
leaves neither a ledger row nor a stock change behind.
"""

from datetime import timedelta

import pytest

from inventory_engine.exceptions import (
    InsufficientStockError,
    ProductNotFoundError,
    StoreError,
    ValidationError,
)


class TestRecordTransaction:
    def test_sale_reduces_stock(self, inventory_service, widget, user_id, stock_of):
        result = inventory_service.record_transaction(
            product_id=widget.id, quantity=3, transaction_type="sale", user_id=user_id
        )

        entry = result.data
        assert result.message == "Transaction created successfully"
        assert entry.type == "sale"
        assert entry.previous_stock == 5
        assert entry.new_stock == 2
        assert stock_of(widget.id) == 2

    def test_purchase_increases_stock(self, inventory_service, widget, user_id, stock_of):
        entry = inventory_service.record_transaction(
            product_id=widget.id, quantity=10, transaction_type="purchase", user_id=user_id
        ).data

        assert entry.new_stock == 15
        assert stock_of(widget.id) == 15

    def test_sale_of_entire_stock(self, inventory_service, widget, user_id, stock_of):
        inventory_service.record_transaction(widget.id, 5, "sale", user_id)
        assert stock_of(widget.id) == 0

    def test_transaction_date_from_clock(
        self, inventory_service, widget, user_id, deterministic_clock
    ):
        entry = inventory_service.record_transaction(widget.id, 1, "sale", user_id).data
        assert entry.transaction_date == deterministic_clock.now()

    def test_widget_walkthrough(self, inventory_service, widget, user_id, ledger_count):
        """Sell 3, fail to sell 10 more, buy 10, value the inventory."""
        first = inventory_service.record_transaction(widget.id, 3, "sale", user_id).data
        assert (first.previous_stock, first.new_stock) == (5, 2)

        with pytest.raises(InsufficientStockError) as exc_info:
            inventory_service.record_transaction(widget.id, 10, "sale", user_id)
        assert str(exc_info.value) == (
            "Insufficient stock for Widget. Requested: 10, Available: 2"
        )

        restock = inventory_service.record_transaction(
            widget.id, 10, "purchase", user_id
        ).data
        assert restock.new_stock == 12

        assert ledger_count(widget.id) == 2
        value = inventory_service.get_inventory_value().data
        assert str(value.total_value) == "120.00"


class TestRecordTransactionFailures:
    def test_insufficient_stock_writes_nothing(
        self, inventory_service, widget, user_id, stock_of, ledger_count
    ):
        with pytest.raises(InsufficientStockError) as exc_info:
            inventory_service.record_transaction(widget.id, 6, "sale", user_id)

        error = exc_info.value
        assert error.code == "INSUFFICIENT_STOCK"
        assert (error.requested, error.available) == (6, 5)
        assert stock_of(widget.id) == 5
        assert ledger_count(widget.id) == 0

    def test_unknown_product(self, inventory_service, reference_data, user_id):
        with pytest.raises(ProductNotFoundError):
            inventory_service.record_transaction(999, 1, "purchase", user_id)

    def test_unknown_user_rolls_back_stock(
        self, inventory_service, widget, stock_of, ledger_count
    ):
        with pytest.raises(StoreError) as exc_info:
            inventory_service.record_transaction(widget.id, 2, "sale", 9999)

        assert exc_info.value.operation == "create transaction"
        assert exc_info.value.__cause__ is not None
        assert stock_of(widget.id) == 5
        assert ledger_count(widget.id) == 0

    def test_validation_happens_first(self, inventory_service, widget, user_id):
        with pytest.raises(ValidationError, match="Missing required fields: type"):
            inventory_service.record_transaction(widget.id, 1, None, user_id)
        with pytest.raises(ValidationError, match="Quantity must be greater than 0"):
            inventory_service.record_transaction(widget.id, 0, "sale", user_id)

    def test_rollback_logged(self, inventory_service, widget, user_id, captured_logs):
        with pytest.raises(InsufficientStockError):
            inventory_service.record_transaction(widget.id, 50, "sale", user_id)

        messages = [r["message"] for r in captured_logs()]
        assert "insufficient_stock" in messages
        assert "transaction_rolled_back" in messages
        assert "transaction_recorded" not in messages


class TestProductHistory:
    def test_newest_first_with_names(
        self, inventory_service, widget, reference_data, deterministic_clock
    ):
        alice = reference_data["users"]["alice"]
        bob = reference_data["users"]["bob"]

        inventory_service.record_transaction(widget.id, 1, "sale", alice)
        deterministic_clock.advance(60)
        inventory_service.record_transaction(widget.id, 4, "purchase", bob)

        result = inventory_service.get_product_history(widget.id)
        history = result.data

        assert result.meta == {"productId": widget.id, "total": 2}
        assert [e.type for e in history] == ["purchase", "sale"]
        assert [e.user_name for e in history] == ["bob", "alice"]
        assert {e.product_name for e in history} == {"Widget"}
        assert history[0].transaction_date - history[1].transaction_date == timedelta(
            seconds=60
        )

    def test_same_timestamp_ordered_by_id(self, inventory_service, widget, user_id):
        first = inventory_service.record_transaction(widget.id, 1, "sale", user_id).data
        second = inventory_service.record_transaction(widget.id, 1, "sale", user_id).data

        history = inventory_service.get_product_history(widget.id).data
        assert [e.id for e in history] == [second.id, first.id]

    def test_unknown_product_has_empty_history(self, inventory_service, reference_data):
        result = inventory_service.get_product_history(12345)
        assert result.data == []
        assert result.meta["total"] == 0

    def test_history_rendering(self, inventory_service, widget, user_id):
        inventory_service.record_transaction(widget.id, 2, "sale", user_id)

        payload = inventory_service.get_product_history(widget.id).to_dict()
        row = payload["data"][0]
        assert row["productName"] == "Widget"
        assert row["userName"] == "alice"
        assert "previousStock" not in row
