"""FastAPI application factory"""

import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from sales_gateway.api.dependencies import get_record_store
from sales_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from sales_gateway.api.routes import sales
from sales_gateway.domain.exceptions import DataSourceError
from sales_gateway.domain.query import SalesQueryService
from sales_gateway.infrastructure.observability.logging import setup_logging
from sales_gateway.infrastructure.store import RecordStore
from sales_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Warm the record store at boot; a failure is retried on the first request
    unless fail_fast_on_load_error is set"""
    try:
        await app.state.record_store.load()
    except DataSourceError as e:
        if settings.fail_fast_on_load_error:
            raise
        logging.warning(f"Boot-time sales load failed, will retry on demand: {e}")
    yield


def create_app(store: RecordStore | None = None) -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Retail Sales Gateway",
        description="Search, filter, sort and paginate retail sales records",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.state.record_store = store or RecordStore()
    app.state.query_service = SalesQueryService(
        app.state.record_store,
        default_page_size=settings.default_page_size,
        max_page_size=settings.max_page_size,
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.get("/")
    def root():
        return {"message": "Retail Sales Management API is running"}

    # Health check endpoint
    @app.get("/health")
    def health_check(record_store: RecordStore = Depends(get_record_store)):
        return {
            "status": "ok",
            "service": settings.service_name,
            "store": record_store.state.value,
            "records": len(record_store),
        }

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(sales.router, prefix="/api", tags=["sales"])

    return app


app = create_app()
