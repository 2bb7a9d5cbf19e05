"""
Product detail transformation.

Builds the product detail page payload from a catalog ``productView``
requested with the detail selection (long copy, stock level, attribute
labels and, for complex products, variants).
"""

from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from product_search.exceptions import ProductTransformError
from product_search.models import (
    Breadcrumb,
    CardImage,
    ConfigurableOption,
    DetailImage,
    ProductAttribute,
    ProductDetail,
    ProductVariant,
)
from product_search.pricing import (
    calculate_discount_percent,
    extract_price_value,
    format_price,
    is_on_sale,
)
from product_search.products import (
    ensure_https_url,
    find_attribute_value,
    is_complex_product,
    transform_configurable_options,
)

COLOR_OPTION_CODE = "cs_color"
PRODUCT_FAMILY_ATTRIBUTE = "cs_product_family"


def _number(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def transform_detail_images(images: Any, product_name: str) -> List[DetailImage]:
    """First image is the main image, the rest are thumbnails."""
    result = []
    for image in images or []:
        if not isinstance(image, dict) or not image.get("url"):
            continue
        result.append(DetailImage(
            url=ensure_https_url(image["url"]),
            alt_text=image.get("label") or product_name or "",
            type="thumbnail" if result else "image",
        ))
    return result


def transform_attributes(attributes: Any) -> List[ProductAttribute]:
    return [
        ProductAttribute(
            key=attr.get("name") or "",
            label=attr.get("label") or attr.get("name") or "",
            value=str(attr.get("value") or ""),
        )
        for attr in attributes or []
        if isinstance(attr, dict)
    ]


def build_breadcrumbs(attributes: List[ProductAttribute], name: str, url_key: str) -> List[Breadcrumb]:
    """Product family (or "Products") followed by the product itself."""
    category_name, category_path = "Products", "/products"
    for attr in attributes:
        if attr.key == PRODUCT_FAMILY_ATTRIBUTE and attr.value:
            category_name, category_path = attr.value, f"/{attr.value.lower()}"
            break

    return [
        Breadcrumb(name=category_name, url_path=category_path),
        Breadcrumb(name=name, url_path=f"/products/{url_key}"),
    ]


def _variant_attributes(attributes: Any, configurable_options: List[ConfigurableOption]) -> Dict[str, str]:
    """
    Option code -> label. Color labels are mapped back to the swatch value of
    the matching configurable option so the storefront can match swatches.
    """
    color_values = {
        value.label: value.value
        for option in configurable_options
        if option.attribute_code == COLOR_OPTION_CODE
        for value in option.values
    }

    result: Dict[str, str] = {}
    for attr in attributes or []:
        if not isinstance(attr, dict) or not attr.get("code") or not attr.get("label"):
            continue
        code, label = attr["code"], attr["label"]
        result[code] = (color_values.get(label) or label) if code == COLOR_OPTION_CODE else label
    return result


def transform_variant(variant: Dict[str, Any], configurable_options: List[ConfigurableOption]) -> ProductVariant:
    product = variant.get("product")
    if not isinstance(product, dict):
        product = {}
    sku = product.get("sku") or ""

    regular_price = extract_price_value(product, "regular", False)
    final_price = extract_price_value(product, "final", False) or regular_price

    image = None
    images = transform_detail_images(product.get("images"), product.get("name") or "")
    if images:
        image = CardImage(url=images[0].url, alt_text=images[0].alt_text or f"{sku} variant")

    return ProductVariant(
        id=sku,
        sku=sku,
        name=product.get("name") or "",
        attributes=_variant_attributes(variant.get("attributes"), configurable_options),
        price=format_price(final_price),
        original_price=format_price(regular_price) if is_on_sale(regular_price, final_price) else None,
        in_stock=bool(product.get("inStock")),
        stock_level=_number(product.get("stockLevel")),
        image=image,
    )


def transform_product_detail(product: Optional[Dict[str, Any]]) -> ProductDetail:
    """
    Build a ProductDetail from a productView.

    Raises:
        ProductTransformError: The record is missing, has no SKU, or has a
            shape the transform or the model rejects.
    """
    if not isinstance(product, dict):
        raise ProductTransformError("product view is missing")
    sku = product.get("sku")
    if not sku:
        raise ProductTransformError(f"product {product.get('urlKey')!r} has no sku")

    try:
        return _build_detail(product, str(sku))
    except ValidationError as e:
        raise ProductTransformError(f"product {sku!r} is malformed: {e.error_count()} errors") from e
    except (TypeError, AttributeError) as e:
        raise ProductTransformError(f"product {sku!r} has an unexpected shape: {e}") from e


def _build_detail(product: Dict[str, Any], sku: str) -> ProductDetail:
    complex_product = is_complex_product(product)
    regular_price = extract_price_value(product, "regular", complex_product)
    final_price = extract_price_value(product, "final", complex_product)

    name = product.get("name") or ""
    url_key = product.get("urlKey") or ""
    attributes = transform_attributes(product.get("attributes"))
    configurable_options = transform_configurable_options(product.get("options"))
    variants = [
        transform_variant(variant, configurable_options)
        for variant in product.get("variants") or []
        if isinstance(variant, dict)
    ]

    return ProductDetail(
        id=str(product.get("id") or ""),
        sku=sku,
        name=name,
        url_key=url_key,
        description=product.get("description") or "",
        short_description=product.get("shortDescription") or "",
        in_stock=bool(product.get("inStock")),
        stock_level=_number(product.get("stockLevel")),
        manufacturer=find_attribute_value(product.get("attributes"), "manufacturer"),
        price=format_price(final_price),
        original_price=format_price(regular_price) if is_on_sale(regular_price, final_price) else None,
        discount_percent=calculate_discount_percent(regular_price, final_price),
        images=transform_detail_images(product.get("images"), name),
        attributes=attributes,
        breadcrumbs=build_breadcrumbs(attributes, name, url_key),
        configurable_options=configurable_options,
        variants=variants,
    )
