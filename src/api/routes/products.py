"""
Product search API routes.

Thin wrappers over ProductSearchService. The service decides between Live
Search and the Catalog Service and applies each capability's failure policy;
the routes translate a re-raised cards or detail failure into a 502 and a
missing product into a 404.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from core.logging import get_logger
from product_search.exceptions import BackendError, ProductSearchError
from product_search.models import (
    ProductCardsResponse,
    ProductDetail,
    ProductFacetsResponse,
    ProductSearchFilterResponse,
    SearchRequest,
    SearchSuggestionsResponse,
)
from product_search.service import ProductSearchService, get_product_search_service

logger = get_logger(__name__)

router = APIRouter(prefix="/api/products", tags=["Products"])


@router.post(
    "/cards",
    response_model=ProductCardsResponse,
    summary="Product listing cards",
)
async def product_cards(
    request: SearchRequest,
    service: ProductSearchService = Depends(get_product_search_service),
) -> ProductCardsResponse:
    """
    Cards for a search or a category/filter listing.

    - **phrase** present: Live Search ranking merged with catalog detail
    - **phrase** blank: Catalog Service browse
    """
    try:
        return await service.product_cards(request)
    except BackendError as e:
        raise HTTPException(status_code=502, detail=f"Product search backend failed ({e.backend})") from e
    except ProductSearchError as e:
        raise HTTPException(status_code=502, detail="Product search failed") from e


@router.post(
    "/search",
    response_model=ProductSearchFilterResponse,
    summary="Products and facets",
)
async def product_search_filter(
    request: SearchRequest,
    service: ProductSearchService = Depends(get_product_search_service),
) -> ProductSearchFilterResponse:
    """Products plus filter facets. Backend failures yield an empty result, not an error."""
    return await service.product_search_filter(request)


@router.post(
    "/facets",
    response_model=ProductFacetsResponse,
    summary="Filter facets",
)
async def product_facets(
    request: SearchRequest,
    service: ProductSearchService = Depends(get_product_search_service),
) -> ProductFacetsResponse:
    return await service.product_facets(request)


@router.get(
    "/suggestions",
    response_model=SearchSuggestionsResponse,
    summary="Search autocomplete",
)
async def search_suggestions(
    phrase: str = Query("", description="Partial search phrase (2+ characters)"),
    service: ProductSearchService = Depends(get_product_search_service),
) -> SearchSuggestionsResponse:
    suggestions = await service.search_suggestions(phrase)
    return SearchSuggestionsResponse(phrase=phrase, suggestions=suggestions)


@router.get(
    "/detail/{url_key}",
    response_model=ProductDetail,
    summary="Product detail",
)
async def product_detail(
    url_key: str,
    service: ProductSearchService = Depends(get_product_search_service),
) -> ProductDetail:
    """
    Product detail page data for one URL key.

    - **404**: no product has this URL key
    - **502**: the Catalog Service failed
    """
    try:
        product = await service.product_detail(url_key)
    except BackendError as e:
        raise HTTPException(status_code=502, detail=f"Product search backend failed ({e.backend})") from e
    except ProductSearchError as e:
        raise HTTPException(status_code=502, detail="Product search failed") from e

    if product is None:
        raise HTTPException(status_code=404, detail=f"Product '{url_key}' not found")
    return product
