from dataclasses import dataclass
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from inventory_api.core.exceptions import NotFound
from inventory_api.core.filters import (
    ProductFilters,
    active_predicate,
    build_product_predicate,
    low_stock_predicate,
)
from inventory_api.core.pagination import DEFAULT_LIMIT, MAX_LIMIT, PageStats, PageWindow, build_window
from inventory_api.core.sorting import compose_sort, order_by_clauses
from inventory_api.models.product import Product
from inventory_api.services.store_errors import translate_store_errors


@dataclass
class ProductPage:
    items: list[Product]
    window: PageWindow
    stats: PageStats

    @property
    def count(self) -> int:
        return len(self.items)


class ListingService:
    def __init__(
        self,
        db: Session,
        *,
        default_limit: int = DEFAULT_LIMIT,
        max_limit: Optional[int] = MAX_LIMIT,
    ):
        self.db = db
        self.default_limit = default_limit
        self.max_limit = max_limit

    def list_products(
        self,
        filters: Optional[ProductFilters] = None,
        sort: Optional[str] = None,
        page=None,
        limit=None,
    ) -> ProductPage:
        predicate = build_product_predicate(filters or ProductFilters())
        window = build_window(page, limit, default_limit=self.default_limit, max_limit=self.max_limit)
        ordering = order_by_clauses(compose_sort(sort))

        query = (
            select(Product)
            .where(predicate)
            .order_by(*ordering, Product.id.asc())
            .offset(window.skip)
            .limit(window.limit)
        )
        with translate_store_errors(self.db, "listing products"):
            items = list(self.db.execute(query).scalars().all())
            total = self.db.scalar(select(func.count(Product.id)).where(predicate)) or 0

        return ProductPage(items=items, window=window, stats=window.stats(total))

    def list_low_stock(self) -> list[Product]:
        query = (
            select(Product)
            .where(low_stock_predicate())
            .order_by(Product.stock.asc(), Product.id.asc())
        )
        with translate_store_errors(self.db, "listing low-stock products"):
            return list(self.db.execute(query).scalars().all())

    def list_by_category(self, category: str) -> list[Product]:
        query = (
            select(Product)
            .where(active_predicate(), Product.category == category)
            .order_by(Product.name.asc(), Product.id.asc())
        )
        with translate_store_errors(self.db, "listing products by category"):
            return list(self.db.execute(query).scalars().all())

    def get_product(self, product_id: int) -> Product:
        with translate_store_errors(self.db, "loading a product"):
            product = self.db.get(Product, product_id)
        if product is None:
            raise NotFound("Product not found")
        return product


__all__ = ["ListingService", "ProductPage"]
