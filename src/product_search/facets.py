"""
Facet transformation: backend facet buckets -> storefront filter facets.
"""

from typing import Any, Dict, List, Optional

from product_search.facet_mappings import attribute_code_to_url_key
from product_search.models import Facet, FacetOption

SCALAR_BUCKET_TYPE = "SCALAR"


def _facet_type(bucket_type: Optional[str]) -> str:
    return "checkbox" if bucket_type == SCALAR_BUCKET_TYPE else "radio"


def _options(buckets: Any) -> List[FacetOption]:
    options = []
    for bucket in buckets or []:
        if not isinstance(bucket, dict):
            continue
        title = str(bucket.get("title") or "")
        options.append(FacetOption(id=title, name=title, count=bucket.get("count") or 0))
    return options


def transform_facet(raw_facet: Dict[str, Any]) -> Facet:
    attribute_code = raw_facet.get("attribute") or ""
    key = attribute_code_to_url_key(attribute_code)
    return Facet(
        title=raw_facet.get("title") or key,
        key=key,
        attribute_code=attribute_code,
        type=_facet_type(raw_facet.get("type")),
        options=_options(raw_facet.get("buckets")),
    )


def transform_facets(raw_facets: Optional[List[Dict[str, Any]]]) -> List[Facet]:
    """
    Convert backend facets, keeping their order.

    Facets with no buckets are kept (with empty options); non-dict entries
    are skipped.
    """
    if not raw_facets:
        return []
    return [transform_facet(raw) for raw in raw_facets if isinstance(raw, dict)]
