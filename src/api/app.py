"""
FastAPI application factory for the product search gateway.

Usage:
    # Development
    uvicorn api.app:create_app --factory --reload

    # Production
    uvicorn api.app:app --host 0.0.0.0 --port 8080 --workers 4

    # Tests build their own instance
    from api.app import create_app
    app = create_app(settings=get_settings_for_testing())
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import Settings, get_settings
from core.logging import configure_logging, get_logger
from core.middleware import RequestTracingMiddleware
from product_search.commerce_client import close_clients


logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Configure logging on startup; close the backend HTTP clients on shutdown.

    Backend clients are created lazily on the first request that needs them.
    """
    settings: Settings = app.state.settings

    configure_logging(
        json_logs=settings.is_production,
        log_level="DEBUG" if settings.debug else "INFO",
    )

    logger.info(
        "Starting product search gateway",
        environment=settings.environment,
        catalog_endpoint=settings.catalog_service_endpoint,
        live_search_endpoint=settings.resolved_live_search_endpoint,
    )

    try:
        yield
    finally:
        logger.info("Shutting down product search gateway")
        await close_clients()


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Defaults to the cached process settings.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Product Search Gateway",
        description="""
        Storefront product search over Adobe Commerce Live Search and Catalog Service.

        ## Features

        - **Smart routing**: Live Search ranking when the shopper typed a phrase, Catalog Service when browsing
        - **Rank-preserving merge**: AI relevance order with full catalog product detail
        - **Unified filters**: SEO-friendly facet keys translated per backend

        ## Main Endpoints

        - `/api/products/cards` - Listing cards
        - `/api/products/search` - Products and facets in one call
        - `/api/products/facets` - Filter facets
        - `/api/products/suggestions` - Autocomplete
        - `/api/products/detail/{url_key}` - Product detail page

        ## Health Checks

        - `/health` - Basic health check
        - `/health/detailed` - Configuration status
        - `/ready` - Kubernetes readiness probe
        - `/live` - Kubernetes liveness probe
        """,
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
    )

    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    # Added last so it wraps CORS and sees every request
    app.add_middleware(RequestTracingMiddleware)

    from api.routes.health import router as health_router
    from api.routes.products import router as products_router
    app.include_router(health_router)
    app.include_router(products_router)

    return app


# Default instance for `uvicorn api.app:app`
app = create_app()
