"""
Sort translation from the storefront vocabulary to each backend.

The Catalog Service takes a single sort object (or nothing) and has no notion
of relevance. Live Search takes a list of sort clauses; an empty list means
its default relevance ordering.
"""

from typing import Dict, List, Optional, Union

from product_search.models import Backend, SortAttribute, SortDirection, SortInput

CatalogSort = Optional[Dict[str, str]]
LiveSearchSort = List[Dict[str, str]]

DEFAULT_SORT_DIRECTION = SortDirection.DESC

_CATALOG_SORT_FIELDS: Dict[str, str] = {
    SortAttribute.PRICE.value: "price",
    SortAttribute.NAME.value: "name",
}

_LIVE_SEARCH_SORT_FIELDS: Dict[str, str] = {
    SortAttribute.PRICE.value: "price",
    SortAttribute.NAME.value: "name",
    SortAttribute.RELEVANCE.value: "relevance",
}


def _sort_clause(field: str, sort: SortInput) -> Dict[str, str]:
    direction = sort.direction or DEFAULT_SORT_DIRECTION
    return {"attribute": field, "direction": direction.value}


def to_catalog_sort(sort: Optional[SortInput]) -> CatalogSort:
    """Catalog sort object, or None for RELEVANCE, unknown attributes and absent sort."""
    if sort is None:
        return None
    field = _CATALOG_SORT_FIELDS.get(sort.attribute)
    if field is None:
        return None
    return _sort_clause(field, sort)


def to_live_search_sort(sort: Optional[SortInput]) -> LiveSearchSort:
    """Live Search sort list; empty for absent sort and unknown attributes."""
    if sort is None:
        return []
    field = _LIVE_SEARCH_SORT_FIELDS.get(sort.attribute)
    if field is None:
        return []
    return [_sort_clause(field, sort)]


def to_backend_sort(
    sort: Optional[SortInput],
    backend: Backend,
) -> Union[CatalogSort, LiveSearchSort]:
    if backend == Backend.CATALOG:
        return to_catalog_sort(sort)
    return to_live_search_sort(sort)
