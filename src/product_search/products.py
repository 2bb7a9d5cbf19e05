"""
Product card transformation.

Turns a catalog-shaped ``productView`` (from either backend, as long as the
full detail selection was requested) into a ProductCard with formatted
prices, discount, first image, color swatches and other variant options.

Simple and complex products are told apart by ``__typename``; the backends
may prefix it (``Catalog_ComplexProductView``) so only the suffix is checked.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import ValidationError

from product_search.exceptions import ProductTransformError
from product_search.facet_mappings import attribute_code_to_url_key
from product_search.models import (
    CardImage,
    ColorOption,
    ConfigurableOption,
    ConfigurableOptionValue,
    ProductCard,
    ProductImage,
)
from product_search.pricing import (
    calculate_discount_percent,
    extract_price_value,
    format_price,
    is_on_sale,
)

COMPLEX_PRODUCT_TYPENAME_SUFFIX = "ComplexProductView"

DEFAULT_SWATCH_HEX = "#000000"
UNKNOWN_COLOR_HEX = "#808080"

# Fallback swatches for options that carry a title but no hex value
COLOR_HEX: Dict[str, str] = {
    "black": "#000000",
    "white": "#FFFFFF",
    "red": "#FF0000",
    "green": "#008000",
    "blue": "#0000FF",
    "yellow": "#FFFF00",
    "orange": "#FFA500",
    "purple": "#800080",
    "pink": "#FFC0CB",
    "brown": "#A52A2A",
    "gray": "#808080",
    "grey": "#808080",
    "silver": "#C0C0C0",
    "gold": "#FFD700",
    "rose gold": "#B76E79",
    "bronze": "#CD7F32",
    "copper": "#B87333",
    "space gray": "#4A4A4A",
    "space grey": "#4A4A4A",
    "midnight": "#003366",
    "graphite": "#41424C",
    "starlight": "#F9F6EF",
    "navy": "#000080",
    "teal": "#008080",
    "turquoise": "#40E0D0",
    "coral": "#FF7F50",
    "lavender": "#E6E6FA",
    "mint": "#98FF98",
    "cream": "#FFFDD0",
    "beige": "#F5F5DC",
}


def is_complex_product(product: Dict[str, Any]) -> bool:
    typename = product.get("__typename") or ""
    return typename.endswith(COMPLEX_PRODUCT_TYPENAME_SUFFIX)


def find_attribute_value(attributes: Optional[List[Dict[str, Any]]], name: str) -> Optional[str]:
    """Look up an attribute by name, also trying the ``cs_``-prefixed and unprefixed variants."""
    if not attributes:
        return None

    candidates = [name, f"cs_{name}"]
    if name.startswith("cs_"):
        candidates.append(name[3:])

    for candidate in candidates:
        for attr in attributes:
            if isinstance(attr, dict) and attr.get("name") == candidate:
                return attr.get("value") or None
    return None


def ensure_https_url(url: Optional[str]) -> Optional[str]:
    """Upgrade http:// and protocol-relative URLs to https://."""
    if not url or not isinstance(url, str):
        return url
    if url.startswith("//"):
        return "https:" + url
    if url.startswith("http://"):
        return "https://" + url[len("http://"):]
    return url


def get_color_hex(color_name: Optional[str]) -> str:
    if not color_name:
        return UNKNOWN_COLOR_HEX
    return COLOR_HEX.get(color_name.lower(), UNKNOWN_COLOR_HEX)


def extract_variant_options(
    options: Optional[List[Dict[str, Any]]],
) -> Tuple[List[ColorOption], Dict[str, List[str]]]:
    """
    Split configurable options into color swatches and plain option lists.

    Option ids are cleaned to URL keys (``cs_memory`` -> ``storage``); the
    ``color`` option becomes swatches, everything else a list of titles.
    """
    colors: List[ColorOption] = []
    named: Dict[str, List[str]] = {}

    for option in options or []:
        option_id = option.get("id") if isinstance(option, dict) else None
        if not option_id or not isinstance(option_id, str):
            continue
        key = attribute_code_to_url_key(option_id) if option_id.startswith("cs_") else option_id
        values = [v for v in option.get("values") or [] if isinstance(v, dict)]

        if key == "color":
            colors = [
                ColorOption(
                    name=v.get("title") or v.get("value") or "",
                    hex=v.get("value") or get_color_hex(v.get("title")) or DEFAULT_SWATCH_HEX,
                )
                for v in values
            ]
        else:
            named[key] = [v.get("title") or v.get("value") or "" for v in values]

    return colors, named


def transform_configurable_options(options: Optional[List[Dict[str, Any]]]) -> List[ConfigurableOption]:
    return [
        ConfigurableOption(
            label=option.get("title") or option.get("label") or "",
            attribute_code=option.get("id") or "",
            values=[
                ConfigurableOptionValue(
                    label=value.get("title") or value.get("label") or "",
                    value=value.get("value") or "",
                )
                for value in option.get("values") or []
                if isinstance(value, dict)
            ],
        )
        for option in options or []
        if isinstance(option, dict)
    ]


def _images(product: Dict[str, Any]) -> List[ProductImage]:
    images = []
    for image in product.get("images") or []:
        if isinstance(image, dict) and image.get("url"):
            images.append(ProductImage(url=ensure_https_url(image["url"]), label=image.get("label")))
    return images


def transform_product_to_card(product: Optional[Dict[str, Any]]) -> ProductCard:
    """
    Build a ProductCard from a productView.

    Raises:
        ProductTransformError: The record is missing or has no SKU, or a
            field has a shape the transform or the card model rejects.
    """
    if not isinstance(product, dict):
        raise ProductTransformError("product view is missing")
    sku = product.get("sku")
    if not sku:
        raise ProductTransformError(f"product {product.get('id')!r} has no sku")

    try:
        return _build_card(product, str(sku))
    except ValidationError as e:
        raise ProductTransformError(f"product {sku!r} is malformed: {e.error_count()} errors") from e
    except (TypeError, AttributeError) as e:
        raise ProductTransformError(f"product {sku!r} has an unexpected shape: {e}") from e


def _build_card(product: Dict[str, Any], sku: str) -> ProductCard:
    complex_product = is_complex_product(product)
    regular_price = extract_price_value(product, "regular", complex_product)
    final_price = extract_price_value(product, "final", complex_product)
    on_sale = is_on_sale(regular_price, final_price)

    images = _images(product)
    name = product.get("name") or ""
    image = CardImage(url=images[0].url, alt_text=images[0].label or name) if images else None

    colors, named_options = extract_variant_options(product.get("options"))
    in_stock = product.get("inStock")

    return ProductCard(
        id=str(product["id"]) if product.get("id") is not None else None,
        sku=sku,
        name=name,
        url_key=product.get("urlKey") or "",
        manufacturer=find_attribute_value(product.get("attributes"), "manufacturer"),
        price=format_price(final_price),
        original_price=format_price(regular_price) if on_sale else None,
        regular_price=regular_price,
        final_price=final_price,
        discount_percent=calculate_discount_percent(regular_price, final_price),
        in_stock=True if in_stock is None else bool(in_stock),
        image=image,
        images=images,
        colors=colors,
        options=named_options,
        configurable_options=transform_configurable_options(product.get("options")),
    )
