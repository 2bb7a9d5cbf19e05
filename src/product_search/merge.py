"""
Rank-preserving merge of Live Search rankings with Catalog Service detail.

Live Search decides the order but returns SKUs only; the Catalog Service
returns full product views in its own order. The merge keeps Live Search's
order and takes the detail from the catalog. SKUs the catalog did not return
are dropped, so a page can come back shorter than requested.
"""

from typing import Any, Dict, Iterable, List, Optional

from core.logging import get_logger

logger = get_logger(__name__)


def ranked_sku(item: Any) -> Optional[str]:
    """SKU of a Live Search item: productView.sku, else product.sku."""
    if not isinstance(item, dict):
        return None
    view = item.get("productView") or {}
    product = item.get("product") or {}
    sku = view.get("sku") or product.get("sku")
    return sku or None


def extract_ranked_skus(items: Optional[Iterable[Any]]) -> List[str]:
    """Ordered SKUs from Live Search items, skipping items without one."""
    return [sku for sku in (ranked_sku(item) for item in items or []) if sku]


def index_by_sku(items: Optional[Iterable[Any]]) -> Dict[str, Dict[str, Any]]:
    """Map sku -> productView for catalog items. Later duplicates win."""
    index: Dict[str, Dict[str, Any]] = {}
    for item in items or []:
        if not isinstance(item, dict):
            continue
        view = item.get("productView")
        if isinstance(view, dict) and view.get("sku"):
            index[view["sku"]] = view
    return index


def merge_ranked_results(
    ranked_skus: List[str],
    details: Dict[str, Dict[str, Any]],
) -> List[Dict[str, Any]]:
    """
    Detail records in ranking order.

    For a ranking [s1..sn] the result is [details[si] for si in ranking if si
    in details].
    """
    merged = [details[sku] for sku in ranked_skus if sku in details]

    missing = len(ranked_skus) - len(merged)
    if missing:
        logger.debug("Ranked SKUs missing from catalog detail", missing=missing, ranked=len(ranked_skus))

    return merged
