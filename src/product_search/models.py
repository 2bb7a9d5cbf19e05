"""
Pydantic models for the product search API.

Storefront-facing fields use camelCase aliases (``urlKey``, ``totalCount``,
``hasMoreItems``); ``page_info`` keeps the backends' snake_case names.
Models accept both the alias and the Python field name on input.
"""

from enum import Enum
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class _StorefrontModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# ============================================================================
# Enums
# ============================================================================

class SearchMode(str, Enum):
    """Which backend strategy serves a request."""
    SEARCH = "search"  # Live Search ranks, Catalog Service supplies detail
    BROWSE = "browse"  # Catalog Service only


class Backend(str, Enum):
    CATALOG = "catalog"
    LIVE_SEARCH = "live_search"


class SortAttribute(str, Enum):
    PRICE = "PRICE"
    NAME = "NAME"
    RELEVANCE = "RELEVANCE"


class SortDirection(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


# ============================================================================
# Request Models
# ============================================================================

class SortInput(_StorefrontModel):
    """Backend-agnostic sort. Unknown attributes are tolerated and fall back to default ordering."""
    attribute: str = Field(..., description="PRICE, NAME or RELEVANCE")
    direction: Optional[SortDirection] = Field(None, description="Defaults to DESC")


class ProductFilter(_StorefrontModel):
    """Unified filter vocabulary, keyed by SEO-friendly URL keys."""
    category_url_key: Optional[str] = Field(None, alias="categoryUrlKey")
    facets: Dict[str, Any] = Field(
        default_factory=dict,
        description='URL key -> value or list of values, e.g. {"manufacturer": ["apple"], "price": "300-500"}',
    )
    on_sale_only: bool = Field(False, alias="onSaleOnly", description="Only products with a discount")


class SearchRequest(_StorefrontModel):
    """Request shared by the cards, search+filter and facets capabilities."""
    phrase: Optional[str] = Field(None, description="Free-text query; non-blank switches to search mode")
    filter: Optional[ProductFilter] = None
    sort: Optional[SortInput] = None
    page: Optional[int] = Field(None, ge=1, description="1-based page number")
    limit: Optional[int] = Field(None, ge=1, description="Page size")

    @property
    def on_sale_only(self) -> bool:
        return bool(self.filter and self.filter.on_sale_only)


# ============================================================================
# Product Cards
# ============================================================================

class ProductImage(_StorefrontModel):
    url: str
    label: Optional[str] = None


class CardImage(_StorefrontModel):
    url: str
    alt_text: Optional[str] = Field(None, alias="altText")


class ColorOption(_StorefrontModel):
    name: str
    hex: str


class ConfigurableOptionValue(_StorefrontModel):
    label: str = ""
    value: str = ""


class ConfigurableOption(_StorefrontModel):
    label: str = ""
    attribute_code: str = Field("", alias="attributeCode")
    values: List[ConfigurableOptionValue] = Field(default_factory=list)


class ProductCard(_StorefrontModel):
    """A listing-ready product built from a catalog-shaped detail record."""
    id: Optional[str] = None
    sku: str = Field(..., min_length=1)
    name: str = ""
    url_key: str = Field("", alias="urlKey")
    manufacturer: Optional[str] = None

    price: str = Field("$0.00", description="Formatted final price")
    original_price: Optional[str] = Field(None, alias="originalPrice", description="Formatted regular price when on sale")
    regular_price: Optional[float] = Field(None, alias="regularPrice")
    final_price: Optional[float] = Field(None, alias="finalPrice")
    discount_percent: int = Field(0, ge=0, alias="discountPercent")
    in_stock: bool = Field(True, alias="inStock")

    image: Optional[CardImage] = None
    images: List[ProductImage] = Field(default_factory=list)

    colors: List[ColorOption] = Field(default_factory=list)
    options: Dict[str, List[str]] = Field(default_factory=dict, description="Non-color variant options, e.g. storage")
    configurable_options: List[ConfigurableOption] = Field(default_factory=list, alias="configurableOptions")


# ============================================================================
# Product Detail
# ============================================================================

class DetailImage(_StorefrontModel):
    url: str
    alt_text: str = Field("", alias="altText")
    type: Literal["image", "thumbnail"] = "thumbnail"


class ProductAttribute(_StorefrontModel):
    key: str
    label: str = ""
    value: str = ""
    type: str = "text"


class Breadcrumb(_StorefrontModel):
    name: str
    url_path: str = Field(..., alias="urlPath")


class ProductVariant(_StorefrontModel):
    """One purchasable child of a configurable product."""
    id: str = ""
    sku: str = ""
    name: str = ""
    attributes: Dict[str, str] = Field(default_factory=dict, description="Option code -> value (hex for colors)")
    price: str = "$0.00"
    original_price: Optional[str] = Field(None, alias="originalPrice")
    in_stock: bool = Field(False, alias="inStock")
    stock_level: Optional[float] = Field(None, alias="stockLevel")
    image: Optional[CardImage] = None


class ProductDetail(_StorefrontModel):
    """Everything a product detail page shows, looked up by URL key."""
    id: str = ""
    sku: str = Field(..., min_length=1)
    name: str = ""
    url_key: str = Field("", alias="urlKey")
    description: str = ""
    short_description: str = Field("", alias="shortDescription")
    in_stock: bool = Field(False, alias="inStock")
    stock_level: Optional[float] = Field(None, alias="stockLevel")
    manufacturer: Optional[str] = None

    price: str = "$0.00"
    original_price: Optional[str] = Field(None, alias="originalPrice")
    discount_percent: int = Field(0, ge=0, alias="discountPercent")

    images: List[DetailImage] = Field(default_factory=list)
    attributes: List[ProductAttribute] = Field(default_factory=list)
    breadcrumbs: List[Breadcrumb] = Field(default_factory=list)
    configurable_options: List[ConfigurableOption] = Field(default_factory=list, alias="configurableOptions")
    variants: List[ProductVariant] = Field(default_factory=list)


# ============================================================================
# Facets
# ============================================================================

class FacetOption(_StorefrontModel):
    id: str
    name: str
    count: int = Field(0, ge=0)


class Facet(_StorefrontModel):
    title: str
    key: str = Field(..., description="URL-safe key used in storefront filters")
    attribute_code: str = Field(..., alias="attributeCode", description="Backend-native attribute code")
    type: Literal["checkbox", "radio"]
    options: List[FacetOption] = Field(default_factory=list)


# ============================================================================
# Response Models
# ============================================================================

class PageInfo(BaseModel):
    current_page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)


class ProductCardsResponse(_StorefrontModel):
    """Cards envelope; also used as the ``products`` block of search+filter."""
    items: List[ProductCard] = Field(default_factory=list)
    total_count: int = Field(0, ge=0, alias="totalCount")
    has_more_items: bool = Field(False, alias="hasMoreItems")
    current_page: int = Field(1, ge=1, alias="currentPage")
    page_info: PageInfo


class FacetsBlock(_StorefrontModel):
    facets: List[Facet] = Field(default_factory=list)
    total_count: int = Field(0, ge=0, alias="totalCount")


class ProductSearchFilterResponse(_StorefrontModel):
    products: ProductCardsResponse
    facets: FacetsBlock
    total_count: int = Field(0, ge=0, alias="totalCount")


class ProductFacetsResponse(_StorefrontModel):
    facets: List[Facet] = Field(default_factory=list)


class SearchSuggestion(_StorefrontModel):
    id: Optional[str] = None
    name: Optional[str] = None
    sku: Optional[str] = None
    url_key: Optional[str] = Field(None, alias="urlKey")
    price: str = "$0.00"
    image: Optional[str] = None


class SearchSuggestionsResponse(_StorefrontModel):
    phrase: str
    suggestions: List[SearchSuggestion] = Field(default_factory=list)
