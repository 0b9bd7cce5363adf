import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from inventory_api.config import Settings, get_settings
from inventory_api.core.exceptions import InventoryError
from inventory_api.core.logging import setup_logging
from inventory_api.core.rate_limit import build_limiter, rate_limit_exceeded_handler
from inventory_api.database import Base, build_session_factory, create_db_engine
from inventory_api.models import Product, User  # noqa: F401  registers tables
from inventory_api.routers import auth_router, health_router, products_router

logger = logging.getLogger(__name__)

API_PREFIX = "/api"

HTTP_ERROR_KINDS = {
    401: "AuthenticationFailed",
    403: "PermissionDenied",
    404: "NotFound",
    405: "MethodNotAllowed",
}


def _validation_message(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        messages.append(f"{location}: {message}" if location else message)
    return "; ".join(messages) or "Invalid request"


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(InventoryError)
    async def _inventory_error(_request: Request, exc: InventoryError):
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException):
        message = exc.detail if isinstance(exc.detail, str) else "Request failed"
        if exc.status_code == status.HTTP_404_NOT_FOUND and message == "Not Found":
            message = f"Not Found - {request.url.path}"
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "success": False,
                "kind": HTTP_ERROR_KINDS.get(exc.status_code, "HTTPError"),
                "message": message,
            },
            headers=getattr(exc, "headers", None),
        )

    app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

    @app.exception_handler(RequestValidationError)
    async def _validation_error(_request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"success": False, "kind": "ValidationError", "message": _validation_message(exc)},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    engine = create_db_engine(settings.DATABASE_URL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        Base.metadata.create_all(bind=engine)
        logger.info("%s %s started (%s)", settings.APP_NAME, settings.APP_VERSION, settings.ENVIRONMENT)
        try:
            yield
        finally:
            engine.dispose()
            logger.info("Database connections closed")

    app = FastAPI(title=settings.APP_NAME, version=settings.APP_VERSION, lifespan=lifespan)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.state.limiter = build_limiter(settings)
    app.add_middleware(SlowAPIMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.LOG_REQUESTS:
        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            start_time = time.perf_counter()
            response = await call_next(request)
            duration = round((time.perf_counter() - start_time) * 1000, 2)
            logger.info(
                "%s %s status=%s time=%sms",
                request.method,
                request.url.path,
                response.status_code,
                duration,
                extra={
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": duration,
                    "client": request.client.host if request.client else None,
                },
            )
            return response

    register_error_handlers(app)

    app.include_router(health_router, prefix=API_PREFIX)
    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(products_router, prefix=API_PREFIX)

    @app.get("/")
    def root():
        return {
            "success": True,
            "message": f"{settings.APP_NAME} is running",
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
        }

    return app


app = create_app()


__all__ = ["app", "create_app", "register_error_handlers"]
