import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inventory_api.core.exceptions import ConstraintViolation, NotFound
from inventory_api.models.product import Product
from inventory_api.schemas.product import ProductWrite
from inventory_api.services.store_errors import translate_store_errors

logger = logging.getLogger(__name__)

DEFAULT_MIN_STOCK = 10


class ProductService:
    def __init__(self, db: Session, *, default_min_stock: int = DEFAULT_MIN_STOCK):
        self.db = db
        self.default_min_stock = default_min_stock

    def _sku_taken(self, sku: str, exclude_id: Optional[int] = None) -> bool:
        query = select(Product.id).where(Product.sku == sku.strip().upper())
        if exclude_id is not None:
            query = query.where(Product.id != exclude_id)
        return self.db.scalar(query.limit(1)) is not None

    def _apply(self, product: Product, payload: ProductWrite) -> None:
        product.name = payload.name
        product.sku = payload.sku
        product.description = payload.description
        product.category = payload.category
        product.price = payload.price
        product.cost = payload.cost
        product.stock = payload.stock
        product.min_stock = (
            payload.min_stock if payload.min_stock is not None else self.default_min_stock
        )
        product.unit = payload.unit
        product.supplier_name = payload.supplier.name if payload.supplier else None
        product.supplier_contact = payload.supplier.contact if payload.supplier else None
        product.is_active = payload.is_active

    def _commit(self, sku: str) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConstraintViolation(f"Product with SKU '{sku}' already exists") from exc

    def create_product(self, payload: ProductWrite, actor_id: int) -> Product:
        with translate_store_errors(self.db, "creating a product"):
            if self._sku_taken(payload.sku):
                raise ConstraintViolation(f"Product with SKU '{payload.sku}' already exists")

            product = Product(created_by_id=actor_id)
            self._apply(product, payload)
            self.db.add(product)
            self._commit(payload.sku)
            self.db.refresh(product)

        logger.info("Created product %s (%s) by user %s", product.id, product.sku, actor_id)
        return product

    def update_product(self, product_id: int, payload: ProductWrite, actor_id: int) -> Product:
        with translate_store_errors(self.db, "updating a product"):
            product = self.db.get(Product, product_id)
            if product is None:
                raise NotFound("Product not found")
            if self._sku_taken(payload.sku, exclude_id=product_id):
                raise ConstraintViolation(f"Product with SKU '{payload.sku}' already exists")

            self._apply(product, payload)
            product.updated_by_id = actor_id
            self._commit(payload.sku)
            self.db.refresh(product)

        logger.info("Updated product %s by user %s", product_id, actor_id)
        return product

    def delete_product(self, product_id: int) -> None:
        with translate_store_errors(self.db, "deleting a product"):
            product = self.db.get(Product, product_id)
            if product is None:
                raise NotFound("Product not found")
            self.db.delete(product)
            self.db.commit()

        logger.info("Deleted product %s (%s)", product_id, product.sku)


__all__ = ["DEFAULT_MIN_STOCK", "ProductService"]
