"""
Tests for the product detail transform.
"""

import pytest

from product_search.detail import (
    build_breadcrumbs,
    transform_attributes,
    transform_detail_images,
    transform_product_detail,
    transform_variant,
)
from product_search.exceptions import ProductTransformError
from product_search.products import transform_configurable_options


@pytest.fixture
def color_options():
    return [
        {
            "id": "cs_color",
            "title": "Color",
            "values": [
                {"title": "Black", "value": "#000000"},
                {"title": "Blue", "value": "#0000FF"},
            ],
        },
        {
            "id": "cs_memory",
            "title": "Memory",
            "values": [{"title": "128GB", "value": "128"}],
        },
    ]


class TestDetailParts:
    """Tests for images, attributes and breadcrumbs."""

    def test_first_image_is_main(self):
        images = transform_detail_images(
            [{"url": "//cdn.example.com/a.jpg", "label": None}, {"url": "http://cdn.example.com/b.jpg", "label": "Back"}],
            "iPhone 15",
        )

        assert [(i.url, i.alt_text, i.type) for i in images] == [
            ("https://cdn.example.com/a.jpg", "iPhone 15", "image"),
            ("https://cdn.example.com/b.jpg", "Back", "thumbnail"),
        ]

    def test_attribute_label_falls_back_to_name(self):
        attributes = transform_attributes([
            {"name": "cs_manufacturer", "label": "Manufacturer", "value": "Apple"},
            {"name": "cs_weight", "value": None},
            "junk",
        ])

        assert [(a.key, a.label, a.value) for a in attributes] == [
            ("cs_manufacturer", "Manufacturer", "Apple"),
            ("cs_weight", "cs_weight", ""),
        ]

    def test_breadcrumbs_from_product_family(self):
        attributes = transform_attributes([{"name": "cs_product_family", "value": "Phones"}])

        crumbs = build_breadcrumbs(attributes, "iPhone 15", "iphone-15")

        assert [(c.name, c.url_path) for c in crumbs] == [
            ("Phones", "/phones"),
            ("iPhone 15", "/products/iphone-15"),
        ]

    def test_breadcrumbs_default_category(self):
        crumbs = build_breadcrumbs([], "iPhone 15", "iphone-15")

        assert crumbs[0].name == "Products"
        assert crumbs[0].url_path == "/products"


class TestTransformVariant:
    """Tests for configurable product variants."""

    def test_color_label_mapped_to_swatch_value(self, color_options):
        variant = {
            "product": {
                "sku": "IPHONE-15-BLUE-128",
                "name": "iPhone 15 Blue",
                "inStock": True,
                "stockLevel": 4,
                "images": [{"url": "http://cdn.example.com/blue.jpg", "label": None}],
                "price": {
                    "regular": {"amount": {"value": 999.0}},
                    "final": {"amount": {"value": 899.0}},
                },
            },
            "attributes": [
                {"code": "cs_color", "label": "Blue"},
                {"code": "cs_memory", "label": "128GB"},
                {"code": "cs_other"},
            ],
        }

        result = transform_variant(variant, transform_configurable_options(color_options))

        assert result.sku == "IPHONE-15-BLUE-128"
        assert result.attributes == {"cs_color": "#0000FF", "cs_memory": "128GB"}
        assert result.price == "$899.00"
        assert result.original_price == "$999.00"
        assert result.in_stock is True
        assert result.stock_level == 4.0
        assert result.image.url == "https://cdn.example.com/blue.jpg"
        assert result.image.alt_text == "iPhone 15 Blue"

    def test_final_price_falls_back_to_regular(self):
        variant = {"product": {"sku": "V1", "price": {"regular": {"amount": {"value": 50.0}}}}}

        result = transform_variant(variant, [])

        assert result.price == "$50.00"
        assert result.original_price is None
        assert result.in_stock is False
        assert result.image is None

    def test_unknown_color_keeps_label(self, color_options):
        variant = {"product": {"sku": "V1"}, "attributes": [{"code": "cs_color", "label": "Green"}]}

        result = transform_variant(variant, transform_configurable_options(color_options))

        assert result.attributes == {"cs_color": "Green"}


class TestTransformProductDetail:
    """Tests for transform_product_detail."""

    def test_simple_product(self, make_product_view):
        view = make_product_view(
            regular=100.0,
            final=80.0,
            description="<p>Long copy</p>",
            shortDescription="Short copy",
            stockLevel=12,
            attributes=[{"name": "cs_manufacturer", "label": "Manufacturer", "value": "Apple"}],
        )

        detail = transform_product_detail(view)

        assert detail.sku == "IPHONE-15"
        assert detail.description == "<p>Long copy</p>"
        assert detail.short_description == "Short copy"
        assert detail.stock_level == 12.0
        assert detail.in_stock is True
        assert detail.manufacturer == "Apple"
        assert detail.price == "$80.00"
        assert detail.original_price == "$100.00"
        assert detail.discount_percent == 20
        assert detail.images[0].type == "image"
        assert detail.attributes[0].label == "Manufacturer"
        assert detail.breadcrumbs[-1].url_path == "/products/iphone-15"
        assert detail.variants == []

    def test_complex_product_with_variants(self, make_product_view, color_options):
        view = make_product_view(
            regular=899.0,
            final=899.0,
            options=color_options,
            variants=[
                {"product": {"sku": "V-BLACK"}, "attributes": [{"code": "cs_color", "label": "Black"}]},
                "junk",
            ],
        )

        detail = transform_product_detail(view)

        assert detail.price == "$899.00"
        assert detail.original_price is None
        assert [o.attribute_code for o in detail.configurable_options] == ["cs_color", "cs_memory"]
        assert [v.attributes for v in detail.variants] == [{"cs_color": "#000000"}]

    def test_serializes_with_storefront_names(self, make_product_view):
        data = transform_product_detail(make_product_view(shortDescription="x")).model_dump(by_alias=True)

        assert "shortDescription" in data
        assert "configurableOptions" in data
        assert "urlPath" in data["breadcrumbs"][0]

    def test_missing_sku_raises(self, make_product_view):
        with pytest.raises(ProductTransformError):
            transform_product_detail(make_product_view(sku=""))

    def test_unexpected_shape_raises(self, make_product_view):
        with pytest.raises(ProductTransformError):
            transform_product_detail(make_product_view(variants=5))

    def test_malformed_price_reads_as_missing(self, make_product_view):
        view = make_product_view(options=[], priceRange={"minimum": ["oops"]})

        assert transform_product_detail(view).price == "$0.00"
