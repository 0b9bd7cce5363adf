from datetime import datetime, timezone

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.ext.hybrid import hybrid_property
from sqlalchemy.orm import relationship, validates

from inventory_api.core.constants import DEFAULT_UNIT
from inventory_api.database.base import Base


class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)

    name = Column(String(100), nullable=False)
    sku = Column(String(64), nullable=False, unique=True)
    description = Column(Text)

    category = Column(String(40), nullable=False)
    price = Column(Float, nullable=False)
    cost = Column(Float, nullable=False)

    stock = Column(Integer, nullable=False, default=0)
    min_stock = Column(Integer, nullable=False, default=10)
    unit = Column(String(10), nullable=False, default=DEFAULT_UNIT)

    supplier_name = Column(String(120))
    supplier_contact = Column(String(120))

    is_active = Column(Boolean, nullable=False, default=True)

    created_by_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    updated_by_id = Column(Integer, ForeignKey("users.id"))

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    created_by = relationship("User", foreign_keys=[created_by_id], lazy="joined")
    updated_by = relationship("User", foreign_keys=[updated_by_id], lazy="joined")

    __table_args__ = (
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
        CheckConstraint("min_stock >= 0", name="ck_products_min_stock_non_negative"),
        CheckConstraint("price >= 0 AND cost >= 0", name="ck_products_amounts_non_negative"),
        Index("idx_products_category_active", "category", "is_active"),
        Index("idx_products_created_at", "created_at"),
    )

    @validates("sku")
    def _normalize_sku(self, _key, value):
        return value.strip().upper() if value else value

    @hybrid_property
    def is_low_stock(self):
        return self.stock <= self.min_stock

    @property
    def profit_margin(self) -> float:
        if not self.cost:
            return 0.0
        return (self.price - self.cost) / self.cost * 100

    @property
    def supplier(self) -> dict | None:
        if self.supplier_name is None and self.supplier_contact is None:
            return None
        return {"name": self.supplier_name, "contact": self.supplier_contact}

    def __repr__(self):
        return f"<Product(sku='{self.sku}', name='{self.name}', stock={self.stock})>"


__all__ = ["Product"]
