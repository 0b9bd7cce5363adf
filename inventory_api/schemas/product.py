from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from inventory_api.core.constants import (
    DEFAULT_UNIT,
    MAX_STORE_INTEGER,
    PRODUCT_CATEGORIES,
    PRODUCT_UNITS,
)
from inventory_api.schemas.common import CamelModel, PageStatsRead
from inventory_api.schemas.user import UserDetail, UserSummary


class Supplier(CamelModel):
    name: Optional[str] = Field(None, max_length=120)
    contact: Optional[str] = Field(None, max_length=120)

    @field_validator("name", "contact")
    @classmethod
    def _strip(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        return value.strip() or None


class ProductWrite(CamelModel):
    """Full product payload, used for both create and update."""

    name: str
    sku: str
    description: Optional[str] = None
    category: str
    price: float = Field(ge=0)
    cost: float = Field(ge=0)
    stock: int = Field(0, ge=0, le=MAX_STORE_INTEGER)
    min_stock: Optional[int] = Field(None, ge=0, le=MAX_STORE_INTEGER)
    unit: str = DEFAULT_UNIT
    supplier: Optional[Supplier] = None
    is_active: bool = True

    @field_validator("name")
    @classmethod
    def _check_name(cls, value: str) -> str:
        value = value.strip()
        if not 3 <= len(value) <= 100:
            raise ValueError("Product name must be between 3-100 characters")
        return value

    @field_validator("sku")
    @classmethod
    def _check_sku(cls, value: str) -> str:
        value = value.strip().upper()
        if not 3 <= len(value) <= 20:
            raise ValueError("SKU must be between 3-20 characters")
        return value

    @field_validator("description")
    @classmethod
    def _check_description(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return None
        value = value.strip()
        if len(value) > 500:
            raise ValueError("Description cannot exceed 500 characters")
        return value or None

    @field_validator("category")
    @classmethod
    def _check_category(cls, value: str) -> str:
        if value not in PRODUCT_CATEGORIES:
            raise ValueError("Invalid category")
        return value

    @field_validator("unit")
    @classmethod
    def _check_unit(cls, value: str) -> str:
        if value not in PRODUCT_UNITS:
            raise ValueError("Invalid unit")
        return value


class ProductCreate(ProductWrite):
    pass


class ProductUpdate(ProductWrite):
    pass


class StockAdjustment(CamelModel):
    quantity: int = Field(ge=1, le=MAX_STORE_INTEGER)
    # Checked by the stock service so unknown operations surface as InvalidOperation.
    operation: str


class ProductRead(CamelModel):
    id: int
    name: str
    sku: str
    description: Optional[str] = None
    category: str
    price: float
    cost: float
    stock: int
    min_stock: int
    unit: str
    supplier: Optional[Supplier] = None
    is_active: bool
    created_by: Optional[UserSummary] = None
    updated_by: Optional[UserSummary] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    profit_margin: float
    is_low_stock: bool


class ProductDetail(ProductRead):
    created_by: Optional[UserDetail] = None
    updated_by: Optional[UserDetail] = None


class ProductListResponse(CamelModel):
    success: bool = True
    count: int
    stats: Optional[PageStatsRead] = None
    data: List[ProductRead]


class ProductResponse(CamelModel):
    success: bool = True
    message: Optional[str] = None
    data: ProductDetail


class CategoryBreakdown(CamelModel):
    category: str
    count: int
    total_stock: int


class DashboardStats(CamelModel):
    total_products: int
    low_stock_count: int
    total_stock_value: float
    recent_products: int
    products_by_category: List[CategoryBreakdown] = Field(default_factory=list)


class DashboardStatsResponse(CamelModel):
    success: bool = True
    data: DashboardStats
