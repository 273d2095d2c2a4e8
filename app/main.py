# app/main.py
#
# Usage:
#   uvicorn app.main:app --port 3000
#   python -m app.main
import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .database import SAMPLE_PRODUCTS, ProductStore
from .exceptions import (
    ProductApiException,
    http_exception_handler,
    product_api_exception_handler,
    request_validation_exception_handler,
    unhandled_exception_handler,
)
from .routes import router as products_router

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level_value,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    """
    Build the product API.

    The store is created here (seeded if SEED_SAMPLE_DATA is set) unless one
    is passed in, and lives on app.state for the lifetime of the process.
    """
    settings = settings or get_settings()
    if store is None:
        store = ProductStore(SAMPLE_PRODUCTS if settings.SEED_SAMPLE_DATA else None)

    app = FastAPI(title="product-api (in-memory)")
    app.state.settings = settings
    app.state.store = store

    if not settings.API_KEY:
        logger.warning("API_KEY is not set; create/update/delete requests will be rejected")

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as exc:
            # anything the route handlers did not translate ends here as a 500
            response = await unhandled_exception_handler(request, exc)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s %s %.1fms", request.method, request.url.path, response.status_code, elapsed_ms
        )
        return response

    # ---------------------------
    # Error translation
    # ---------------------------
    app.add_exception_handler(ProductApiException, product_api_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)

    @app.get("/")
    async def root():
        return {"message": "Welcome to the Product API! Go to /products to see all products."}

    app.include_router(products_router)
    return app


configure_logging(get_settings())
app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
