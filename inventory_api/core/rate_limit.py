from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from inventory_api.config import Settings

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."


def rate_limit_value(settings: Settings) -> str:
    return f"{settings.RATE_LIMIT_MAX_REQUESTS}/{settings.RATE_LIMIT_WINDOW_SECONDS} seconds"


def build_limiter(settings: Settings) -> Limiter:
    """Per-client limiter applied to every route by ``SlowAPIMiddleware``."""
    return Limiter(
        key_func=get_remote_address,
        default_limits=[rate_limit_value(settings)],
        enabled=settings.RATE_LIMIT_ENABLED,
    )


# Must stay sync: SlowAPIMiddleware does not await this handler.
def rate_limit_exceeded_handler(_request: Request, exc: RateLimitExceeded) -> JSONResponse:
    return JSONResponse(
        status_code=429,
        content={"success": False, "kind": "RateLimitExceeded", "message": RATE_LIMIT_MESSAGE},
    )


__all__ = ["RATE_LIMIT_MESSAGE", "build_limiter", "rate_limit_exceeded_handler", "rate_limit_value"]
