"""
Pytest configuration and shared fixtures for the product search gateway tests.
"""
import os
import sys
from typing import Any, AsyncGenerator, Callable, Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), "src"))

# Load environment variables
from dotenv import load_dotenv
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))


# ============================================================================
# Fixtures: Test Data Factories
# ============================================================================

@pytest.fixture
def make_product_view() -> Callable[..., Dict[str, Any]]:
    """
    Factory for catalog-shaped productView dicts.

    Simple products carry ``price``; passing ``options`` makes a complex
    product with ``priceRange`` instead.
    """
    def _make(
        sku: str = "IPHONE-15",
        name: str = "iPhone 15",
        regular: Optional[float] = 999.0,
        final: Optional[float] = 999.0,
        options: Optional[List[Dict[str, Any]]] = None,
        **overrides: Any,
    ) -> Dict[str, Any]:
        prices = {
            "regular": {"amount": {"value": regular}},
            "final": {"amount": {"value": final}},
        }
        view: Dict[str, Any] = {
            "id": f"id-{sku}",
            "sku": sku,
            "name": name,
            "urlKey": sku.lower(),
            "inStock": True,
            "images": [{"url": f"http://cdn.example.com/{sku}.jpg", "label": f"{name} front"}],
            "attributes": [{"name": "cs_manufacturer", "value": "Apple"}],
        }
        if options is None:
            view["__typename"] = "SimpleProductView"
            view["price"] = prices
        else:
            view["__typename"] = "ComplexProductView"
            view["priceRange"] = {"minimum": prices}
            view["options"] = options
        view.update(overrides)
        return view

    return _make


@pytest.fixture
def make_backend_result() -> Callable[..., Dict[str, Any]]:
    """Factory for a ``productSearch`` result object."""
    def _make(
        views: Optional[List[Dict[str, Any]]] = None,
        total_count: Optional[int] = None,
        page_info: Optional[Dict[str, Any]] = None,
        facets: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        views = views or []
        result: Dict[str, Any] = {
            "items": [{"productView": view} for view in views],
            "total_count": len(views) if total_count is None else total_count,
            "page_info": page_info or {"current_page": 1, "page_size": 24, "total_pages": 1},
        }
        if facets is not None:
            result["facets"] = facets
        return result

    return _make


@pytest.fixture
def make_ranking_result() -> Callable[..., Dict[str, Any]]:
    """Factory for a Live Search ranking result (SKUs only)."""
    def _make(
        skus: List[str],
        total_count: Optional[int] = None,
        page_info: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        return {
            "items": [{"product": {"sku": sku}, "productView": {"sku": sku}} for sku in skus],
            "total_count": len(skus) if total_count is None else total_count,
            "page_info": page_info or {"current_page": 1, "page_size": 24, "total_pages": 1},
        }

    return _make


@pytest.fixture
def sample_raw_facets() -> List[Dict[str, Any]]:
    """Backend facets as returned by productSearch."""
    return [
        {
            "attribute": "cs_manufacturer",
            "title": "Manufacturer",
            "type": "SCALAR",
            "buckets": [
                {"title": "Apple", "count": 12},
                {"title": "Samsung", "count": 7},
            ],
        },
        {
            "attribute": "price",
            "title": "Price",
            "type": "INTERVAL",
            "buckets": [
                {"title": "0.0-300.0", "count": 4},
                {"title": "300.0-600.0"},
            ],
        },
    ]


# ============================================================================
# Fixtures: Settings
# ============================================================================

@pytest.fixture
def test_settings():
    """Settings isolated from the environment and .env."""
    from config.settings import get_settings_for_testing
    return get_settings_for_testing()


# ============================================================================
# Fixtures: Mock Services
# ============================================================================

@pytest.fixture
def mock_catalog_client():
    """Catalog Service client with an AsyncMock product_search."""
    from product_search.commerce_client import CatalogServiceClient
    from product_search.models import Backend

    client = MagicMock(spec=CatalogServiceClient)
    client.backend = Backend.CATALOG
    client.product_search = AsyncMock(return_value={})
    return client


@pytest.fixture
def mock_live_search_client():
    """Live Search client with an AsyncMock product_search."""
    from product_search.commerce_client import LiveSearchClient
    from product_search.models import Backend

    client = MagicMock(spec=LiveSearchClient)
    client.backend = Backend.LIVE_SEARCH
    client.product_search = AsyncMock(return_value={})
    return client


@pytest.fixture
def product_search_service(mock_catalog_client, mock_live_search_client, test_settings):
    """ProductSearchService wired to mock backends."""
    from product_search.service import ProductSearchService
    return ProductSearchService(
        catalog_client=mock_catalog_client,
        live_search_client=mock_live_search_client,
        settings=test_settings,
    )


# ============================================================================
# Fixtures: FastAPI Test Client
# ============================================================================

@pytest.fixture
def app(product_search_service, test_settings):
    """FastAPI application with the service dependency pointed at the mocks."""
    from api.app import create_app
    from product_search.service import get_product_search_service

    application = create_app(settings=test_settings)
    application.dependency_overrides[get_product_search_service] = lambda: product_search_service
    return application


@pytest.fixture
async def async_client(app) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


# ============================================================================
# Markers auto-use
# ============================================================================

def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: marks tests as unit tests")
    config.addinivalue_line("markers", "integration: marks tests as integration tests")
    config.addinivalue_line("markers", "slow: marks tests as slow")


# ============================================================================
# Skip conditions
# ============================================================================

def pytest_collection_modifyitems(config, items):
    """Auto-skip integration tests if no commerce environment is configured."""
    skip_integration = pytest.mark.skip(reason="Integration tests require COMMERCE_ENVIRONMENT_ID")

    environment_id = os.getenv("COMMERCE_ENVIRONMENT_ID")

    for item in items:
        if "integration" in item.keywords and not environment_id:
            item.add_marker(skip_integration)
