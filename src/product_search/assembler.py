"""
Response assembly: paging math and the public envelopes.

Paging values prefer what the backend reported, then what the request
asked for, then defaults (page 1, one page, 24 per page).
"""

from typing import Any, Dict, Optional

from product_search.executors import DEFAULT_PAGE_SIZE, QueryResult
from product_search.models import (
    FacetsBlock,
    PageInfo,
    ProductCardsResponse,
    ProductSearchFilterResponse,
    SearchRequest,
)


def build_page_info(
    backend_page_info: Optional[Dict[str, Any]],
    request: SearchRequest,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> PageInfo:
    backend_page_info = backend_page_info or {}
    return PageInfo(
        current_page=backend_page_info.get("current_page") or request.page or 1,
        page_size=backend_page_info.get("page_size") or request.limit or default_page_size,
        total_pages=backend_page_info.get("total_pages") or 1,
    )


def assemble_cards_response(
    result: QueryResult,
    request: SearchRequest,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> ProductCardsResponse:
    page_info = build_page_info(result.page_info, request, default_page_size)
    return ProductCardsResponse(
        items=result.items,
        total_count=result.total_count,
        has_more_items=page_info.current_page < page_info.total_pages,
        current_page=page_info.current_page,
        page_info=page_info,
    )


def assemble_search_filter_response(
    result: QueryResult,
    request: SearchRequest,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> ProductSearchFilterResponse:
    """Products and facets in one envelope, sharing a single totalCount."""
    products = assemble_cards_response(result, request, default_page_size)
    return ProductSearchFilterResponse(
        products=products,
        facets=FacetsBlock(facets=result.facets, total_count=products.total_count),
        total_count=products.total_count,
    )


def empty_search_filter_response(
    request: Optional[SearchRequest] = None,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> ProductSearchFilterResponse:
    """The envelope returned when search+filter fails: no items, no facets, no pages."""
    page_size = (request.limit if request else None) or default_page_size
    return ProductSearchFilterResponse(
        products=ProductCardsResponse(
            items=[],
            total_count=0,
            has_more_items=False,
            current_page=1,
            page_info=PageInfo(current_page=1, page_size=page_size, total_pages=0),
        ),
        facets=FacetsBlock(facets=[], total_count=0),
        total_count=0,
    )
