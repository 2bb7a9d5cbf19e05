"""
Product Search Module: Live Search (AI ranking) + Catalog Service (detail).

Provides:
- ProductSearchService: cards, search+filter, facets, suggestions and product detail
- CatalogServiceClient / LiveSearchClient: async GraphQL clients
- Collaborators: swappable filter builders, sort translators and transforms
- select_mode: SEARCH when a phrase was typed, BROWSE otherwise
"""

from product_search.collaborators import Collaborators, DEFAULT_COLLABORATORS
from product_search.commerce_client import (
    CatalogServiceClient,
    LiveSearchClient,
    close_clients,
    get_catalog_client,
    get_live_search_client,
)
from product_search.containment import Capability, FailurePolicy
from product_search.exceptions import BackendError, ProductSearchError, ProductTransformError
from product_search.models import SearchMode, SearchRequest
from product_search.modes import select_mode
from product_search.service import ProductSearchService, get_product_search_service

__all__ = [
    "BackendError",
    "Capability",
    "CatalogServiceClient",
    "Collaborators",
    "DEFAULT_COLLABORATORS",
    "FailurePolicy",
    "LiveSearchClient",
    "ProductSearchError",
    "ProductSearchService",
    "ProductTransformError",
    "SearchMode",
    "SearchRequest",
    "close_clients",
    "get_catalog_client",
    "get_live_search_client",
    "get_product_search_service",
    "select_mode",
]
