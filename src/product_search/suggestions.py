"""
Search suggestions: compact autocomplete entries from Live Search items.
"""

from typing import Any, Dict, List, Optional

from product_search.models import SearchSuggestion
from product_search.pricing import amount_value, format_price
from product_search.products import ensure_https_url


def is_suggestible_phrase(phrase: Optional[str], min_length: int) -> bool:
    return bool(phrase) and len(phrase.strip()) >= min_length


def _suggestion_price(view: Dict[str, Any]) -> str:
    price = view.get("price") or {}
    amount = amount_value(price.get("final"))
    if amount is None:
        amount = amount_value(price.get("regular"))
    return format_price(amount)


def _first_image(view: Dict[str, Any], product: Dict[str, Any]) -> Optional[str]:
    for image in view.get("images") or []:
        if isinstance(image, dict) and image.get("url"):
            return ensure_https_url(image["url"])
    # Live Search's own product type only has the legacy image fields
    for field in ("small_image", "image"):
        image = product.get(field)
        if isinstance(image, dict) and image.get("url"):
            return ensure_https_url(image["url"])
    return None


def transform_to_suggestion(item: Any) -> Optional[SearchSuggestion]:
    """Build a suggestion from a Live Search item; None when it has neither sku nor name."""
    if not isinstance(item, dict):
        return None
    view = item.get("productView") or {}
    product = item.get("product") or {}

    sku = view.get("sku") or product.get("sku")
    name = product.get("name") or view.get("name")
    if not sku and not name:
        return None

    item_id = view.get("id") or product.get("id") or sku or name
    return SearchSuggestion(
        id=str(item_id),
        name=name,
        sku=sku,
        url_key=view.get("urlKey") or product.get("url_key") or sku,
        price=_suggestion_price(view),
        image=_first_image(view, product),
    )


def transform_suggestions(items: Optional[List[Any]]) -> List[SearchSuggestion]:
    suggestions = []
    for item in items or []:
        suggestion = transform_to_suggestion(item)
        if suggestion is not None:
            suggestions.append(suggestion)
    return suggestions
