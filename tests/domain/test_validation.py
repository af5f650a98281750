"""Tests for the pure input validators (no database)."""

from decimal import Decimal

import pytest

from inventory_engine.domain.updates import ProductUpdate
from inventory_engine.domain.validation import (
    parse_transaction_type,
    validate_new_product,
    validate_page,
    validate_product_update,
    validate_stock_adjustment,
    validate_threshold,
    validate_transaction_request,
)
from inventory_engine.exceptions import ValidationError
from inventory_engine.models.transaction import TransactionType


class TestNewProduct:
    def test_valid_product_normalized(self):
        new = validate_new_product("Widget", "", "10.005", 5, 1)
        assert new.name == "Widget"
        assert new.description is None
        assert new.price == Decimal("10.01")
        assert new.stock == 5
        assert new.category_id == 1

    def test_zero_price_and_stock_are_values(self):
        new = validate_new_product("Free sample", None, 0, 0, 1)
        assert new.price == Decimal("0.00")
        assert new.stock == 0

    def test_all_missing_fields_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_new_product(None, None, None, None, None)

        assert exc_info.value.field_errors == [
            "Name is required",
            "Price is required",
            "Stock is required",
            "Category ID is required",
        ]
        assert exc_info.value.code == "VALIDATION_ERROR"

    def test_blank_name_is_missing(self):
        with pytest.raises(ValidationError, match="Name is required"):
            validate_new_product("   ", None, 1, 1, 1)

    def test_negative_price(self):
        with pytest.raises(ValidationError, match="Price cannot be negative"):
            validate_new_product("Widget", None, -1, 1, 1)

    def test_negative_stock(self):
        with pytest.raises(ValidationError, match="Stock cannot be negative"):
            validate_new_product("Widget", None, 1, -1, 1)

    @pytest.mark.parametrize("price", ["abc", "NaN", True])
    def test_price_not_a_number(self, price):
        with pytest.raises(ValidationError, match="Price must be a number"):
            validate_new_product("Widget", None, price, 1, 1)

    @pytest.mark.parametrize("price", ["1e30", "10000000000", "9999999999.995"])
    def test_price_out_of_range(self, price):
        with pytest.raises(ValidationError, match="Price out of range"):
            validate_new_product("Widget", None, price, 1, 1)

    def test_largest_storable_price(self):
        new = validate_new_product("Widget", None, "9999999999.99", 1, 1)
        assert new.price == Decimal("9999999999.99")

    @pytest.mark.parametrize("stock", [1.5, "3", True])
    def test_stock_not_an_integer(self, stock):
        with pytest.raises(ValidationError, match="Stock must be an integer"):
            validate_new_product("Widget", None, 1, stock, 1)

    def test_category_not_an_integer(self):
        with pytest.raises(ValidationError, match="Category ID must be an integer"):
            validate_new_product("Widget", None, 1, 1, "tools")

    def test_description_must_be_string(self):
        with pytest.raises(ValidationError, match="Description must be a string"):
            validate_new_product("Widget", 42, 1, 1, 1)


class TestProductUpdate:
    def test_empty_update(self):
        with pytest.raises(ValidationError, match="No fields to update"):
            validate_product_update(ProductUpdate())

    def test_only_supplied_fields_returned(self):
        values = validate_product_update(ProductUpdate(price="12.5"))
        assert values == {"price": Decimal("12.50")}

    def test_description_can_be_cleared(self):
        assert validate_product_update(ProductUpdate(description=None)) == {
            "description": None
        }

    @pytest.mark.parametrize(
        "update, message",
        [
            (ProductUpdate(name=""), "Name cannot be empty"),
            (ProductUpdate(name=None), "Name cannot be empty"),
            (ProductUpdate(price=None), "Price cannot be null"),
            (ProductUpdate(price=-3), "Price cannot be negative"),
            (ProductUpdate(price="1e30"), "Price out of range"),
            (ProductUpdate(category_id=None), "Category ID cannot be null"),
            (ProductUpdate(category_id="2"), "Category ID must be an integer"),
        ],
    )
    def test_invalid_fields(self, update, message):
        with pytest.raises(ValidationError, match=message):
            validate_product_update(update)


class TestTransactionRequest:
    def test_valid(self):
        request = validate_transaction_request(1, 3, "sale", 2)
        assert request.transaction_type is TransactionType.SALE
        assert request.quantity == 3

    def test_missing_fields_listed(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_transaction_request(1, None, "sale", None)

        assert str(exc_info.value) == "Missing required fields: quantity, userId"
        assert exc_info.value.field_errors == ["quantity", "userId"]

    @pytest.mark.parametrize("quantity", [0, -4])
    def test_quantity_must_be_positive(self, quantity):
        with pytest.raises(ValidationError, match="Quantity must be greater than 0"):
            validate_transaction_request(1, quantity, "purchase", 1)

    def test_quantity_must_be_integer(self):
        with pytest.raises(ValidationError, match="Quantity must be an integer"):
            validate_transaction_request(1, 2.5, "purchase", 1)

    def test_unknown_type(self):
        with pytest.raises(ValidationError, match="Invalid transaction type"):
            validate_transaction_request(1, 1, "refund", 1)

    def test_ids_must_be_integers(self):
        with pytest.raises(ValidationError) as exc_info:
            validate_transaction_request("1", 1, "sale", "2")
        assert exc_info.value.field_errors == [
            "Product ID must be an integer",
            "User ID must be an integer",
        ]


class TestStockAdjustment:
    def test_purchase_accepts_any_integer_delta(self):
        assert validate_stock_adjustment(1, -5, "purchase") is TransactionType.PURCHASE

    def test_sale_rejects_negative_delta(self):
        with pytest.raises(ValidationError, match="Stock cannot be negative"):
            validate_stock_adjustment(1, -1, "sale")

    def test_sale_zero_delta_allowed(self):
        assert validate_stock_adjustment(1, 0, "sale") is TransactionType.SALE

    def test_delta_must_be_integer(self):
        with pytest.raises(ValidationError, match="Stock must be an integer"):
            validate_stock_adjustment(1, None, "purchase")


class TestPagingAndThreshold:
    def test_valid_page(self):
        assert validate_page(2, 5) == (2, 5)

    @pytest.mark.parametrize("page, limit", [(0, 5), (1, 0), ("1", 5)])
    def test_invalid_page(self, page, limit):
        with pytest.raises(ValidationError):
            validate_page(page, limit)

    def test_threshold_must_be_integer(self):
        with pytest.raises(ValidationError, match="Threshold must be an integer"):
            validate_threshold("10")


def test_parse_transaction_type():
    assert parse_transaction_type("purchase") is TransactionType.PURCHASE
    with pytest.raises(ValidationError):
        parse_transaction_type("SALE")
