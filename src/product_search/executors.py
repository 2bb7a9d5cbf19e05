"""
Query executors: one backend round trip (or two, concurrently) per request.

BROWSE
    run_catalog_query: a single Catalog Service query with full detail.

SEARCH
    run_dual_query: Live Search ranks (SKUs only) while the Catalog Service
    fetches detail for the same phrase/page; the results are merged in
    Live Search order.
    run_live_search_query: a single Live Search query with full detail,
    used when facets are wanted alongside the products.

Every executor returns a QueryResult with cards already built. Records the
card transform rejects are dropped and logged; backend failures propagate.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Tuple

from core.logging import get_logger, truncate_message
from product_search.collaborators import DEFAULT_COLLABORATORS, Collaborators
from product_search.commerce_client import CatalogServiceClient, LiveSearchClient
from product_search.exceptions import ProductTransformError
from product_search.merge import extract_ranked_skus, index_by_sku, merge_ranked_results
from product_search.models import Facet, ProductCard, SearchRequest
from product_search.queries import CARDS_QUERY, CARDS_WITH_FACETS_QUERY, RANKING_QUERY

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 24


@dataclass
class QueryResult:
    """Cards plus the paging data the assembler needs."""
    items: List[ProductCard] = field(default_factory=list)
    total_count: int = 0
    page_info: Dict[str, Any] = field(default_factory=dict)
    facets: List[Facet] = field(default_factory=list)


def transform_cards(
    views: Iterable[Any],
    transform_card: Callable[[Any], ProductCard],
) -> List[ProductCard]:
    """Build cards, dropping (and logging) records the transform rejects."""
    cards = []
    for view in views:
        try:
            cards.append(transform_card(view))
        except ProductTransformError as e:
            logger.warning("Dropping product record", error=truncate_message(str(e)))
    return cards


def apply_on_sale_filter(
    items: List[ProductCard],
    total_count: int,
    on_sale_only: bool,
) -> Tuple[List[ProductCard], int]:
    """
    Keep discounted cards only. The backend's count no longer applies, so
    the total becomes the number of cards that survived.
    """
    if not on_sale_only:
        return items, total_count
    discounted = [card for card in items if card.discount_percent > 0]
    return discounted, len(discounted)


def _views(result: Dict[str, Any]) -> List[Any]:
    return [item.get("productView") if isinstance(item, dict) else None for item in result.get("items") or []]


def _paging_args(request: SearchRequest, default_page_size: int) -> Dict[str, int]:
    return {
        "page_size": request.limit or default_page_size,
        "current_page": request.page or 1,
    }


def _build_result(
    request: SearchRequest,
    cards: List[ProductCard],
    backend_result: Dict[str, Any],
    collaborators: Collaborators,
    with_facets: bool,
) -> QueryResult:
    items, total_count = apply_on_sale_filter(
        cards,
        backend_result.get("total_count") or 0,
        request.on_sale_only,
    )
    return QueryResult(
        items=items,
        total_count=total_count,
        page_info=backend_result.get("page_info") or {},
        facets=collaborators.transform_facets(backend_result.get("facets")) if with_facets else [],
    )


async def run_catalog_query(
    request: SearchRequest,
    catalog: CatalogServiceClient,
    collaborators: Collaborators = DEFAULT_COLLABORATORS,
    with_facets: bool = False,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> QueryResult:
    """BROWSE: one catalog query, no phrase."""
    result = await catalog.product_search(
        CARDS_WITH_FACETS_QUERY if with_facets else CARDS_QUERY,
        phrase="",
        filter=collaborators.build_catalog_filters(request.filter),
        sort=collaborators.to_catalog_sort(request.sort),
        **_paging_args(request, default_page_size),
    )

    cards = transform_cards(_views(result), collaborators.transform_card)
    return _build_result(request, cards, result, collaborators, with_facets)


async def run_live_search_query(
    request: SearchRequest,
    live_search: LiveSearchClient,
    collaborators: Collaborators = DEFAULT_COLLABORATORS,
    with_facets: bool = True,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> QueryResult:
    """SEARCH with facets: one Live Search query returning full product views."""
    result = await live_search.product_search(
        CARDS_WITH_FACETS_QUERY if with_facets else CARDS_QUERY,
        phrase=request.phrase or "",
        filter=collaborators.build_live_search_filters(request.filter),
        sort=collaborators.to_live_search_sort(request.sort),
        **_paging_args(request, default_page_size),
    )

    cards = transform_cards(_views(result), collaborators.transform_card)
    return _build_result(request, cards, result, collaborators, with_facets)


async def run_dual_query(
    request: SearchRequest,
    live_search: LiveSearchClient,
    catalog: CatalogServiceClient,
    collaborators: Collaborators = DEFAULT_COLLABORATORS,
    default_page_size: int = DEFAULT_PAGE_SIZE,
) -> QueryResult:
    """
    SEARCH: Live Search ranking joined with Catalog Service detail.

    Both calls always run to completion. If either fails, the first failure
    (Live Search before catalog) is raised and nothing is merged.
    """
    paging = _paging_args(request, default_page_size)
    phrase = request.phrase or ""

    ranking, detail = await asyncio.gather(
        live_search.product_search(
            RANKING_QUERY,
            phrase=phrase,
            filter=collaborators.build_live_search_filters(request.filter),
            sort=collaborators.to_live_search_sort(request.sort),
            **paging,
        ),
        catalog.product_search(
            CARDS_QUERY,
            phrase=phrase,
            filter=collaborators.build_catalog_filters(request.filter),
            sort=collaborators.to_catalog_sort(request.sort),
            **paging,
        ),
        return_exceptions=True,
    )

    for outcome in (ranking, detail):
        if isinstance(outcome, BaseException):
            raise outcome

    ranked_skus = extract_ranked_skus(ranking.get("items"))
    merged = merge_ranked_results(ranked_skus, index_by_sku(detail.get("items")))
    cards = transform_cards(merged, collaborators.transform_card)

    logger.debug("Merged ranked results", ranked=len(ranked_skus), merged=len(merged), cards=len(cards))
    return _build_result(request, cards, ranking, collaborators, with_facets=False)
