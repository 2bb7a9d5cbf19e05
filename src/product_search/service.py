"""
Product search service: the public capabilities.

    product_cards           cards envelope; failures are re-raised
    product_search_filter   cards + facets; failures yield an empty envelope
    product_facets          facets only; failures yield no facets
    search_suggestions      autocomplete; failures yield no suggestions
    product_detail          one product by URL key; failures are re-raised

The listing capabilities pick SEARCH or BROWSE from the phrase, run the
matching executor and assemble the envelope. Failure handling lives in
``containment``; this module only states which capability it is.
"""

import threading
from typing import List, Optional

from config.settings import Settings, get_settings
from core.logging import bind_context, get_logger, truncate_message, unbind_context
from product_search.assembler import (
    assemble_cards_response,
    assemble_search_filter_response,
    empty_search_filter_response,
)
from product_search.collaborators import DEFAULT_COLLABORATORS, Collaborators
from product_search.commerce_client import (
    CatalogServiceClient,
    LiveSearchClient,
    get_catalog_client,
    get_live_search_client,
)
from product_search.containment import Capability, contain_failures
from product_search.exceptions import ProductTransformError
from product_search.executors import run_catalog_query, run_dual_query, run_live_search_query
from product_search.models import (
    ProductCardsResponse,
    ProductDetail,
    ProductFacetsResponse,
    ProductSearchFilterResponse,
    SearchMode,
    SearchRequest,
    SearchSuggestion,
)
from product_search.modes import select_mode
from product_search.queries import FACETS_QUERY, PRODUCT_DETAIL_QUERY, SUGGESTIONS_QUERY
from product_search.suggestions import is_suggestible_phrase

logger = get_logger(__name__)


def _empty_search_filter(service: "ProductSearchService", request: SearchRequest) -> ProductSearchFilterResponse:
    return empty_search_filter_response(request, service.settings.default_page_size)


def _empty_facets(service: "ProductSearchService", request: SearchRequest) -> ProductFacetsResponse:
    return ProductFacetsResponse(facets=[])


def _empty_suggestions(service: "ProductSearchService", phrase: Optional[str]) -> List[SearchSuggestion]:
    return []


class ProductSearchService:
    """
    Storefront product search over Live Search and the Catalog Service.

    Clients default to the process-wide singletons; collaborators default to
    the stock filter builders, sort translators and transforms.
    """

    def __init__(
        self,
        catalog_client: Optional[CatalogServiceClient] = None,
        live_search_client: Optional[LiveSearchClient] = None,
        collaborators: Optional[Collaborators] = None,
        settings: Optional[Settings] = None,
    ):
        self._catalog = catalog_client
        self._live_search = live_search_client
        self.collaborators = collaborators or DEFAULT_COLLABORATORS
        self.settings = settings or get_settings()

    @property
    def catalog(self) -> CatalogServiceClient:
        if self._catalog is None:
            self._catalog = get_catalog_client()
        return self._catalog

    @property
    def live_search(self) -> LiveSearchClient:
        if self._live_search is None:
            self._live_search = get_live_search_client()
        return self._live_search

    # =========================================================================
    # Capabilities
    # =========================================================================

    @contain_failures(Capability.PRODUCT_CARDS)
    async def product_cards(self, request: SearchRequest) -> ProductCardsResponse:
        """
        Product listing cards.

        SEARCH merges Live Search ranking with catalog detail; BROWSE reads
        the catalog directly. Backend failures propagate to the caller.
        """
        mode = select_mode(request)
        bind_context(capability=Capability.PRODUCT_CARDS.value, search_mode=mode.value)
        try:
            if mode == SearchMode.SEARCH:
                result = await run_dual_query(
                    request,
                    self.live_search,
                    self.catalog,
                    self.collaborators,
                    default_page_size=self.settings.default_page_size,
                )
            else:
                result = await run_catalog_query(
                    request,
                    self.catalog,
                    self.collaborators,
                    default_page_size=self.settings.default_page_size,
                )

            logger.info("Product cards", items=len(result.items), total_count=result.total_count)
            return assemble_cards_response(result, request, self.settings.default_page_size)
        finally:
            unbind_context("capability", "search_mode")

    @contain_failures(Capability.PRODUCT_SEARCH_FILTER, fallback=_empty_search_filter)
    async def product_search_filter(self, request: SearchRequest) -> ProductSearchFilterResponse:
        """
        Products and facets in one call. Never raises: on failure the empty
        envelope is returned.
        """
        mode = select_mode(request)
        bind_context(capability=Capability.PRODUCT_SEARCH_FILTER.value, search_mode=mode.value)
        try:
            if mode == SearchMode.SEARCH:
                result = await run_live_search_query(
                    request,
                    self.live_search,
                    self.collaborators,
                    with_facets=True,
                    default_page_size=self.settings.default_page_size,
                )
            else:
                result = await run_catalog_query(
                    request,
                    self.catalog,
                    self.collaborators,
                    with_facets=True,
                    default_page_size=self.settings.default_page_size,
                )

            logger.info(
                "Product search filter",
                items=len(result.items),
                facets=len(result.facets),
                total_count=result.total_count,
            )
            return assemble_search_filter_response(result, request, self.settings.default_page_size)
        finally:
            unbind_context("capability", "search_mode")

    @contain_failures(Capability.PRODUCT_FACETS, fallback=_empty_facets)
    async def product_facets(self, request: SearchRequest) -> ProductFacetsResponse:
        """Facets for the current phrase and filter. Counts cover all matches, so one item per page is enough."""
        if select_mode(request) == SearchMode.SEARCH:
            result = await self.live_search.product_search(
                FACETS_QUERY,
                phrase=request.phrase or "",
                filter=self.collaborators.build_live_search_filters(request.filter),
                page_size=1,
                current_page=1,
            )
        else:
            result = await self.catalog.product_search(
                FACETS_QUERY,
                phrase="",
                filter=self.collaborators.build_catalog_filters(request.filter),
                page_size=1,
                current_page=1,
            )

        return ProductFacetsResponse(facets=self.collaborators.transform_facets(result.get("facets")))

    @contain_failures(Capability.SEARCH_SUGGESTIONS, fallback=_empty_suggestions)
    async def search_suggestions(self, phrase: Optional[str]) -> List[SearchSuggestion]:
        """Autocomplete from Live Search; short phrases never reach the backend."""
        if not is_suggestible_phrase(phrase, self.settings.suggestions_min_length):
            return []

        result = await self.live_search.product_search(
            SUGGESTIONS_QUERY,
            phrase=phrase.strip(),
            page_size=self.settings.suggestions_limit,
            current_page=1,
        )
        return self.collaborators.transform_suggestions(result.get("items"))

    @contain_failures(Capability.PRODUCT_DETAIL)
    async def product_detail(self, url_key: Optional[str]) -> Optional[ProductDetail]:
        """
        Product detail page data from the Catalog Service.

        Returns None when the URL key is blank, nothing matches, or the one
        matching record cannot be transformed. Backend failures propagate.
        """
        url_key = (url_key or "").strip()
        if not url_key:
            return None

        result = await self.catalog.product_search(
            PRODUCT_DETAIL_QUERY,
            phrase="",
            filter=self.collaborators.build_url_key_filter(url_key),
            page_size=1,
            current_page=1,
        )

        items = result.get("items") or []
        view = items[0].get("productView") if items and isinstance(items[0], dict) else None
        if not view:
            logger.info("Product not found", url_key=url_key)
            return None

        try:
            return self.collaborators.transform_detail(view)
        except ProductTransformError as e:
            logger.warning(
                "Dropping product record",
                url_key=url_key,
                error=truncate_message(str(e), self.settings.log_message_limit),
            )
            return None


# =============================================================================
# Singleton
# =============================================================================

_service: Optional[ProductSearchService] = None
_service_lock = threading.Lock()


def get_product_search_service() -> ProductSearchService:
    """Get or create the ProductSearchService singleton (thread-safe)."""
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = ProductSearchService()
    return _service
