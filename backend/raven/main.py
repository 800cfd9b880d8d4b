# backend/raven/main.py
"""
Raven API entry point.

Run locally with ``uvicorn raven.main:app --reload`` from the backend
directory.
"""

from contextlib import asynccontextmanager
import logging
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import is_running_tests, settings
from .core.constants import API_DESCRIPTION, API_TITLE, API_VERSION
from .core.exceptions import DomainException, is_db_pool_exhaustion
from .database import init_db
from .middleware.prometheus_middleware import PrometheusMiddleware
from .routes.v1 import (
    analytics as analytics_v1,
    calendar as calendar_v1,
    cart as cart_v1,
    catalog as catalog_v1,
    health as health_v1,
    instructors as instructors_v1,
    prometheus as prometheus_v1,
    search as search_v1,
)

# Configure logging
logging.basicConfig(
    level=settings.log_level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def app_lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup/shutdown."""
    logger.info(f"{API_TITLE} starting up...")
    logger.info(f"Environment: {settings.environment}")

    if is_running_tests():
        logger.info("Running under pytest (test mode active)")
    else:
        init_db()

    yield

    logger.info(f"{API_TITLE} shutting down...")


app = FastAPI(
    title=API_TITLE,
    description=API_DESCRIPTION,
    version=API_VERSION,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=app_lifespan,
)


@app.exception_handler(DomainException)
async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    """Domain errors that escape a route keep their status and structured detail."""
    http_exc = exc.to_http_exception()
    return JSONResponse(status_code=http_exc.status_code, content={"detail": http_exc.detail})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=True
    )
    if is_db_pool_exhaustion(exc):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Service temporarily overloaded. Please retry."},
            headers={"Retry-After": "2"},
        )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An internal error occurred"},
    )


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["*"],
)
logger.info("CORS allow_origins=%s allow_credentials=%s", settings.allowed_origins, True)

if settings.prometheus_enabled:
    app.add_middleware(PrometheusMiddleware)

api_v1 = APIRouter(prefix="/api/v1")
api_v1.include_router(health_v1.router)
api_v1.include_router(catalog_v1.router)
api_v1.include_router(search_v1.router, prefix="/search")
api_v1.include_router(instructors_v1.router, prefix="/instructors")
api_v1.include_router(calendar_v1.router, prefix="/calendar")
api_v1.include_router(cart_v1.router, prefix="/cart")
api_v1.include_router(analytics_v1.router, prefix="/analytics")
api_v1.include_router(prometheus_v1.router, prefix="/metrics")

app.include_router(api_v1)


@app.get("/")
def read_root() -> dict:
    return {"message": f"Welcome to the {API_TITLE}", "version": API_VERSION, "docs": "/docs"}
