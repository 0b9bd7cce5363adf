from inventory_api.services.aggregation_service import AggregationService
from inventory_api.services.auth_service import AuthService
from inventory_api.services.listing_service import ListingService, ProductPage
from inventory_api.services.product_service import ProductService
from inventory_api.services.stock_service import StockService

__all__ = [
    "AggregationService",
    "AuthService",
    "ListingService",
    "ProductPage",
    "ProductService",
    "StockService",
]
