from datetime import datetime
from typing import Optional

from sqlalchemy import case, desc, func, select
from sqlalchemy.orm import Session

from inventory_api.core.dates import days_before
from inventory_api.core.filters import active_predicate
from inventory_api.models.product import Product
from inventory_api.services.store_errors import translate_store_errors

RECENT_PRODUCTS_DAYS = 7


class AggregationService:
    def __init__(self, db: Session, *, recent_days: int = RECENT_PRODUCTS_DAYS):
        self.db = db
        self.recent_days = recent_days

    def dashboard_stats(self, now: Optional[datetime] = None) -> dict:
        """Counts, stock valuation and category breakdown over active products."""
        since = days_before(self.recent_days, now)

        summary_query = select(
            func.count(Product.id),
            func.coalesce(func.sum(case((Product.is_low_stock, 1), else_=0)), 0),
            func.coalesce(func.sum(Product.stock * Product.cost), 0.0),
            func.coalesce(func.sum(case((Product.created_at >= since, 1), else_=0)), 0),
        ).where(active_predicate())

        item_count = func.count(Product.id).label("count")
        category_query = (
            select(
                Product.category,
                item_count,
                func.coalesce(func.sum(Product.stock), 0).label("total_stock"),
            )
            .where(active_predicate())
            .group_by(Product.category)
            .order_by(desc(item_count), Product.category.asc())
        )

        with translate_store_errors(self.db, "computing dashboard statistics"):
            total, low_stock, stock_value, recent = self.db.execute(summary_query).one()
            categories = self.db.execute(category_query).all()

        return {
            "total_products": int(total or 0),
            "low_stock_count": int(low_stock or 0),
            "total_stock_value": float(stock_value or 0.0),
            "recent_products": int(recent or 0),
            "products_by_category": [
                {
                    "category": category,
                    "count": int(count),
                    "total_stock": int(total_stock or 0),
                }
                for category, count, total_stock in categories
            ],
        }


__all__ = ["AggregationService", "RECENT_PRODUCTS_DAYS"]
