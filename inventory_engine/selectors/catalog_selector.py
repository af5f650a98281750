"""Catalog queries: paged product listing and filtering by category name."""

from __future__ import annotations

from sqlalchemy import func, select

from inventory_engine.domain.dtos import ProductInfo, ProductPage
from inventory_engine.models.category import Category
from inventory_engine.models.product import Product
from inventory_engine.selectors.base import BaseSelector


def _to_dto(product: Product, category_name: str | None = None) -> ProductInfo:
    return ProductInfo(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        stock=product.stock,
        category_id=product.category_id,
        category_name=category_name,
    )


class CatalogSelector(BaseSelector):
    """Read-only product queries."""

    def list_page(self, page: int, limit: int) -> ProductPage:
        """
        One page of products in insertion (id) order.

        Args:
            page: 1-based page number.
            limit: Page size.
        """
        rows = self.session.execute(
            select(Product)
            .order_by(Product.id)
            .offset((page - 1) * limit)
            .limit(limit)
        ).scalars().all()

        total = self.session.execute(
            select(func.count()).select_from(Product)
        ).scalar_one()

        return ProductPage(
            items=[_to_dto(p) for p in rows],
            total=total,
            page=page,
            limit=limit,
        )

    def list_by_category(self, category_name: str) -> list[ProductInfo]:
        """Products whose category has this exact name; empty if none."""
        rows = self.session.execute(
            select(Product, Category.name)
            .join(Category, Product.category_id == Category.id)
            .where(Category.name == category_name)
            .order_by(Product.id)
        ).all()
        return [_to_dto(product, name) for product, name in rows]
