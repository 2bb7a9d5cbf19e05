"""
Price helpers: extraction from product views, display formatting, discount math.

Simple products carry ``price.{regular,final}.amount.value``; complex
(configurable) products carry the same shape under ``priceRange.minimum``.
"""

from typing import Any, Dict, Optional, Tuple

PRICE_RANGE_CEILING = 999999.0


def format_price(amount: Optional[float]) -> str:
    """
    Format an amount for display, e.g. 1234.5 -> "$1,234.50".

    Always returns a string; a missing amount renders as "$0.00".
    """
    if amount is None:
        return "$0.00"
    return f"${float(amount):,.2f}"


def is_on_sale(regular_price: Optional[float], final_price: Optional[float]) -> bool:
    return bool(regular_price and final_price and final_price < regular_price)


def calculate_discount_percent(
    regular_price: Optional[float],
    final_price: Optional[float],
) -> int:
    """Whole-number percentage off the regular price; 0 when there is no discount."""
    if not is_on_sale(regular_price, final_price):
        return 0
    # Round half up, like the storefront does
    return int((regular_price - final_price) / regular_price * 100 + 0.5)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def amount_value(block: Any) -> Optional[float]:
    if not isinstance(block, dict):
        return None
    amount = block.get("amount")
    if not isinstance(amount, dict):
        return None
    value = amount.get("value")
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def extract_price_value(
    product: Optional[Dict[str, Any]],
    price_type: str,
    is_complex: bool,
) -> Optional[float]:
    """
    Read the regular or final amount from a product view.

    Args:
        product: productView dict from either backend.
        price_type: "regular" or "final".
        is_complex: Read from priceRange.minimum instead of price.
    """
    if not isinstance(product, dict):
        return None
    if is_complex:
        container = _as_dict(_as_dict(product.get("priceRange")).get("minimum"))
    else:
        container = _as_dict(product.get("price"))
    return amount_value(container.get(price_type))


def parse_price_range(value: Any) -> Tuple[float, float]:
    """
    Parse a "min-max" range string into floats.

    Missing or unparsable bounds fall back to 0 and PRICE_RANGE_CEILING,
    so "300-" means "300 and up".
    """
    if not isinstance(value, str):
        return 0.0, PRICE_RANGE_CEILING

    low, _, high = value.partition("-")

    def _parse(part: str, default: float) -> float:
        try:
            parsed = float(part)
        except ValueError:
            return default
        return parsed or default

    return _parse(low.strip(), 0.0), _parse(high.strip(), PRICE_RANGE_CEILING)
