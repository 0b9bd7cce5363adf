from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query, status

from inventory_api.core.constants import EDITOR_ROLES, MAX_STORE_INTEGER
from inventory_api.core.filters import ProductFilters
from inventory_api.dependencies import (
    get_aggregation_service,
    get_current_user,
    get_listing_service,
    get_product_service,
    get_stock_service,
    require_roles,
)
from inventory_api.models.user import User
from inventory_api.schemas.common import MessageResponse
from inventory_api.schemas.product import (
    DashboardStatsResponse,
    ProductCreate,
    ProductListResponse,
    ProductResponse,
    ProductUpdate,
    StockAdjustment,
)
from inventory_api.services import (
    AggregationService,
    ListingService,
    ProductService,
    StockService,
)

router = APIRouter(prefix="/products", tags=["Products"])

ProductId = Annotated[int, Path(le=MAX_STORE_INTEGER)]


@router.get("", response_model=ProductListResponse)
def list_products(
    category: Optional[str] = Query(None, description="Exact category"),
    min_price: Optional[str] = Query(None, alias="minPrice"),
    max_price: Optional[str] = Query(None, alias="maxPrice"),
    min_stock: Optional[str] = Query(None, alias="minStock"),
    max_stock: Optional[str] = Query(None, alias="maxStock"),
    is_active: Optional[str] = Query(None, alias="isActive"),
    search: Optional[str] = Query(None, description="Matches name, SKU or description"),
    sort: Optional[str] = Query(None, description="Comma-separated fields, '-' for descending"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    listing: ListingService = Depends(get_listing_service),
    _user: User = Depends(get_current_user),
):
    filters = ProductFilters(
        category=category,
        min_price=min_price,
        max_price=max_price,
        min_stock=min_stock,
        max_stock=max_stock,
        is_active=is_active,
        search=search,
    )
    result = listing.list_products(filters, sort=sort, page=page, limit=limit)
    return {
        "success": True,
        "count": result.count,
        "stats": result.stats,
        "data": result.items,
    }


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    products: ProductService = Depends(get_product_service),
    user: User = Depends(require_roles(*EDITOR_ROLES)),
):
    product = products.create_product(payload, actor_id=user.id)
    return {"success": True, "message": "Product created successfully", "data": product}


@router.get("/low-stock", response_model=ProductListResponse)
def list_low_stock_products(
    listing: ListingService = Depends(get_listing_service),
    _user: User = Depends(get_current_user),
):
    items = listing.list_low_stock()
    return {"success": True, "count": len(items), "data": items}


@router.get("/stats/dashboard", response_model=DashboardStatsResponse)
def dashboard_stats(
    aggregation: AggregationService = Depends(get_aggregation_service),
    _user: User = Depends(get_current_user),
):
    return {"success": True, "data": aggregation.dashboard_stats()}


@router.get("/category/{category}", response_model=ProductListResponse)
def list_products_by_category(
    category: str,
    listing: ListingService = Depends(get_listing_service),
    _user: User = Depends(get_current_user),
):
    items = listing.list_by_category(category)
    return {"success": True, "count": len(items), "data": items}


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: ProductId,
    listing: ListingService = Depends(get_listing_service),
    _user: User = Depends(get_current_user),
):
    return {"success": True, "data": listing.get_product(product_id)}


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: ProductId,
    payload: ProductUpdate,
    products: ProductService = Depends(get_product_service),
    user: User = Depends(require_roles(*EDITOR_ROLES)),
):
    product = products.update_product(product_id, payload, actor_id=user.id)
    return {"success": True, "message": "Product updated successfully", "data": product}


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: ProductId,
    products: ProductService = Depends(get_product_service),
    _user: User = Depends(require_roles("admin")),
):
    products.delete_product(product_id)
    return {"success": True, "message": "Product deleted successfully"}


@router.patch("/{product_id}/stock", response_model=ProductResponse)
def update_stock(
    product_id: ProductId,
    payload: StockAdjustment,
    stock: StockService = Depends(get_stock_service),
    user: User = Depends(require_roles(*EDITOR_ROLES)),
):
    product = stock.adjust_stock(product_id, payload.quantity, payload.operation, actor_id=user.id)
    return {"success": True, "message": "Stock updated successfully", "data": product}


__all__ = ["router"]
