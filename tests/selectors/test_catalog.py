"""Tests for product listing, pagination and category filtering."""

import pytest

from inventory_engine.exceptions import ValidationError


@pytest.fixture
def catalog(make_product, other_category_id):
    """Seven tools and two electronics, created in name order."""
    tools = [make_product(name=f"Tool {i}", stock=i) for i in range(7)]
    gadgets = [
        make_product(name=f"Gadget {i}", category=other_category_id) for i in range(2)
    ]
    return tools + gadgets


class TestListProducts:
    def test_default_page_size(self, inventory_service, catalog):
        result = inventory_service.list_products()

        assert [p.id for p in result.data] == [p.id for p in catalog[:5]]
        assert result.meta == {"total": 9, "page": 1, "limit": 5, "totalPages": 2}

    def test_last_page_is_partial(self, inventory_service, catalog):
        result = inventory_service.list_products(page=2, limit=5)
        assert [p.name for p in result.data] == ["Tool 5", "Tool 6", "Gadget 0", "Gadget 1"]

    def test_page_past_end_is_empty(self, inventory_service, catalog):
        result = inventory_service.list_products(page=10, limit=5)
        assert result.data == []
        assert result.meta["total"] == 9

    def test_empty_catalog(self, inventory_service, reference_data):
        result = inventory_service.list_products()
        assert result.data == []
        assert result.meta["totalPages"] == 0

    def test_invalid_paging(self, inventory_service):
        with pytest.raises(ValidationError):
            inventory_service.list_products(page=0)


class TestListByCategory:
    def test_filters_and_names_category(self, inventory_service, catalog):
        result = inventory_service.list_products_by_category("Electronics")

        assert [p.name for p in result.data] == ["Gadget 0", "Gadget 1"]
        assert {p.category_name for p in result.data} == {"Electronics"}
        assert result.meta == {"category": "Electronics", "total": 2}

    def test_unknown_category_is_empty(self, inventory_service, catalog):
        result = inventory_service.list_products_by_category("Garden")
        assert result.data == []
        assert result.meta["total"] == 0
