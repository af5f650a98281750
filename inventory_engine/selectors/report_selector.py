"""Reporting queries: inventory valuation and low-stock alerts."""

from sqlalchemy import func, select

from inventory_engine.db.types import round_money, to_decimal
from inventory_engine.domain.dtos import InventoryValuation, ProductInfo
from inventory_engine.models.category import Category
from inventory_engine.models.product import Product
from inventory_engine.selectors.base import BaseSelector


class ReportSelector(BaseSelector):
    """Derived figures computed on demand; nothing here is stored."""

    def inventory_value(self, currency: str) -> InventoryValuation:
        """Sum of price x stock over every product; zero for an empty catalog."""
        total = self.session.execute(
            select(func.sum(Product.price * Product.stock))
        ).scalar()
        return InventoryValuation(
            total_value=round_money(to_decimal(total)),
            currency=currency,
        )

    def low_stock(self, threshold: int) -> list[ProductInfo]:
        """Products with stock <= threshold, lowest stock first."""
        rows = self.session.execute(
            select(Product, Category.name)
            .join(Category, Product.category_id == Category.id)
            .where(Product.stock <= threshold)
            .order_by(Product.stock.asc(), Product.id.asc())
        ).all()
        return [
            ProductInfo(
                id=product.id,
                name=product.name,
                description=product.description,
                price=product.price,
                stock=product.stock,
                category_id=product.category_id,
                category_name=category_name,
            )
            for product, category_name in rows
        ]
