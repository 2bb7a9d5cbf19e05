"""
Collaborators used by the query executors and the service.

Filter builders, sort translators and the card, detail, facet and suggestion
transforms are passed in as one bundle rather than imported at the call
sites, so a test (or another storefront) can swap any of them.
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from product_search import detail, facets, filters, products, sorting, suggestions
from product_search.models import Facet, ProductCard, ProductDetail, ProductFilter, SearchSuggestion, SortInput

FilterBuilder = Callable[[Optional[ProductFilter]], List[Dict[str, Any]]]


@dataclass(frozen=True)
class Collaborators:
    build_catalog_filters: FilterBuilder = filters.build_catalog_filters
    build_live_search_filters: FilterBuilder = filters.build_live_search_filters
    to_catalog_sort: Callable[[Optional[SortInput]], Optional[Dict[str, str]]] = sorting.to_catalog_sort
    to_live_search_sort: Callable[[Optional[SortInput]], List[Dict[str, str]]] = sorting.to_live_search_sort
    transform_card: Callable[[Any], ProductCard] = products.transform_product_to_card
    transform_facets: Callable[[Any], List[Facet]] = facets.transform_facets
    transform_suggestions: Callable[[Any], List[SearchSuggestion]] = suggestions.transform_suggestions
    build_url_key_filter: Callable[[str], List[Dict[str, Any]]] = filters.build_url_key_filter
    transform_detail: Callable[[Any], ProductDetail] = detail.transform_product_detail


DEFAULT_COLLABORATORS = Collaborators()
