from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from inventory_api.config import Settings
from inventory_api.core.exceptions import AuthenticationFailed, PermissionDenied
from inventory_api.core.security import decode_access_token, get_bearer_token
from inventory_api.database.session import get_db
from inventory_api.models.user import User
from inventory_api.services import (
    AggregationService,
    AuthService,
    ListingService,
    ProductService,
    StockService,
)


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AuthService:
    return AuthService(db, settings)


def get_listing_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ListingService:
    return ListingService(db, default_limit=settings.DEFAULT_PAGE_SIZE, max_limit=settings.MAX_PAGE_SIZE)


def get_aggregation_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> AggregationService:
    return AggregationService(db, recent_days=settings.RECENT_PRODUCTS_DAYS)


def get_product_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
) -> ProductService:
    return ProductService(db, default_min_stock=settings.DEFAULT_MIN_STOCK)


def get_stock_service(db: Session = Depends(get_db)) -> StockService:
    return StockService(db)


def get_current_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_app_settings),
    auth_service: AuthService = Depends(get_auth_service),
) -> User:
    token = get_bearer_token(authorization)
    if not token:
        raise AuthenticationFailed("Not authorized, no token")
    user_id = decode_access_token(token, settings)
    return auth_service.get_active_user(user_id)


def require_roles(*roles: str):
    def _check_role(user: User = Depends(get_current_user)) -> User:
        if user.role not in roles:
            raise PermissionDenied(f"User role '{user.role}' is not authorized to access this route")
        return user

    return _check_role


__all__ = [
    "get_aggregation_service",
    "get_app_settings",
    "get_auth_service",
    "get_current_user",
    "get_db",
    "get_listing_service",
    "get_product_service",
    "get_stock_service",
    "require_roles",
]
