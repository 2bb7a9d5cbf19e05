"""
Filter translation from the storefront vocabulary to each backend.

Both backends take a list of search clauses (``{"attribute", "in"}`` or
``{"attribute", "range"}``). They differ in the category attribute name:
the Catalog Service filters on ``categoryPath``, Live Search on
``categories``. ``onSaleOnly`` is never forwarded: sale status is derived
from prices after the fact.

The builders only read the filter they are given; the orchestrator hands the
same ProductFilter to both.
"""

from typing import Any, Dict, List, Optional

from product_search.facet_mappings import url_key_to_attribute_code
from product_search.models import ProductFilter
from product_search.pricing import parse_price_range

SearchClause = Dict[str, Any]

CATALOG_CATEGORY_ATTRIBUTE = "categoryPath"
LIVE_SEARCH_CATEGORY_ATTRIBUTE = "categories"

_MANUFACTURER_ATTRIBUTES = frozenset({"manufacturer", "cs_manufacturer"})


def normalize_filter_value(value: Any) -> Any:
    """Capitalize the first letter and lowercase the rest ("APPLE" -> "Apple")."""
    if not value or not isinstance(value, str):
        return value
    return value[:1].upper() + value[1:].lower()


def _is_empty(value: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return len(value) == 0
    return value is None or value == "" or value is False


def _as_list(value: Any) -> List[Any]:
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _facet_clause(url_key: str, value: Any) -> Optional[SearchClause]:
    attribute_code = url_key_to_attribute_code(url_key)

    if attribute_code == "price":
        raw = value[0] if isinstance(value, (list, tuple)) else value
        if not isinstance(raw, str) or "-" not in raw:
            return None
        low, high = parse_price_range(raw)
        return {"attribute": attribute_code, "range": {"from": low, "to": high}}

    if attribute_code in _MANUFACTURER_ATTRIBUTES:
        return {
            "attribute": attribute_code,
            "in": [normalize_filter_value(v) for v in _as_list(value)],
        }

    return {"attribute": attribute_code, "in": _as_list(value)}


def _build_filters(product_filter: Optional[ProductFilter], category_attribute: str) -> List[SearchClause]:
    if product_filter is None:
        return []

    clauses: List[SearchClause] = []

    if product_filter.category_url_key:
        clauses.append({
            "attribute": category_attribute,
            "in": [product_filter.category_url_key],
        })

    for url_key, value in (product_filter.facets or {}).items():
        if _is_empty(value):
            continue
        clause = _facet_clause(url_key, value)
        if clause is not None:
            clauses.append(clause)

    return clauses


def build_catalog_filters(product_filter: Optional[ProductFilter]) -> List[SearchClause]:
    """Catalog Service filter clauses for a storefront filter."""
    return _build_filters(product_filter, CATALOG_CATEGORY_ATTRIBUTE)


def build_live_search_filters(product_filter: Optional[ProductFilter]) -> List[SearchClause]:
    """Live Search filter clauses for a storefront filter."""
    return _build_filters(product_filter, LIVE_SEARCH_CATEGORY_ATTRIBUTE)


def build_url_key_filter(url_key: str) -> List[SearchClause]:
    """Catalog Service filter selecting the one product with this URL key."""
    return [{"attribute": "url_key", "in": [url_key]}]
