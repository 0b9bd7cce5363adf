"""Stock quantity adjustments.

Each adjustment is a single conditional UPDATE, so concurrent subtractions
against the same product are serialized by the store and can never take
stock below zero. When no row is affected the product is re-read to tell a
missing product apart from insufficient stock.
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inventory_api.core.constants import MAX_STORE_INTEGER, STOCK_OPERATIONS
from inventory_api.core.dates import utc_now
from inventory_api.core.exceptions import (
    ConstraintViolation,
    InsufficientStock,
    InvalidOperation,
    NotFound,
)
from inventory_api.models.product import Product
from inventory_api.services.store_errors import translate_store_errors

logger = logging.getLogger(__name__)


class StockService:
    def __init__(self, db: Session):
        self.db = db

    def adjust_stock(self, product_id: int, quantity: int, operation: str, actor_id: int) -> Product:
        if operation not in STOCK_OPERATIONS:
            raise InvalidOperation('Invalid operation. Use "add" or "subtract"')
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise InvalidOperation("Quantity must be a positive integer")
        if quantity > MAX_STORE_INTEGER:
            raise InvalidOperation("Quantity is too large")

        values = {"updated_by_id": actor_id, "updated_at": utc_now()}
        stmt = update(Product).where(Product.id == product_id)
        if operation == "add":
            stmt = stmt.where(Product.stock <= MAX_STORE_INTEGER - quantity)
            values["stock"] = Product.stock + quantity
        else:
            stmt = stmt.where(Product.stock >= quantity)
            values["stock"] = Product.stock - quantity
        stmt = stmt.values(**values).execution_options(synchronize_session=False)

        with translate_store_errors(self.db, "adjusting stock"):
            try:
                result = self.db.execute(stmt)
                if result.rowcount == 0:
                    self._reject(product_id, quantity, operation)
                self.db.commit()
            except IntegrityError as exc:
                self.db.rollback()
                raise ConstraintViolation("Stock update violates product constraints") from exc

            product = self.db.get(Product, product_id, populate_existing=True)

        if product is None:
            raise NotFound("Product not found")
        logger.info(
            "Stock %s %s for product %s by user %s (now %s)",
            operation,
            quantity,
            product_id,
            actor_id,
            product.stock,
        )
        return product

    def _reject(self, product_id: int, quantity: int, operation: str) -> None:
        current = self.db.scalar(select(Product.stock).where(Product.id == product_id))
        self.db.rollback()
        if current is None:
            raise NotFound("Product not found")
        if operation == "add":
            logger.warning("Rejected add of %s for product %s: stock is %s", quantity, product_id, current)
            raise InvalidOperation("Stock would exceed the maximum allowed")
        logger.warning(
            "Rejected %s of %s for product %s: only %s in stock",
            operation,
            quantity,
            product_id,
            current,
        )
        raise InsufficientStock()


__all__ = ["StockService"]
