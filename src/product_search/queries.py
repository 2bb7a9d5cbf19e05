"""
GraphQL documents for the Catalog Service and Live Search ``productSearch`` query.

Both backends expose the same root field and argument names; what differs is
how much of each item we ask for. Selections are plain strings composed into
one query document per call.
"""

PRODUCT_SEARCH_TEMPLATE = """
query productSearch(
  $phrase: String!
  $filter: [SearchClauseInput!]
  $sort: [ProductSearchSortInput!]
  $page_size: Int
  $current_page: Int
) {
  productSearch(
    phrase: $phrase
    filter: $filter
    sort: $sort
    page_size: $page_size
    current_page: $current_page
  ) {
%s
  }
}
"""

PAGING_SELECTION = """
    total_count
    page_info { current_page page_size total_pages }
"""

# Full product view, enough to build a ProductCard
PRODUCT_VIEW_SELECTION = """
      productView {
        __typename
        id name sku urlKey inStock
        images(roles: ["small_image"]) { url label }
        attributes { name value }
        ... on SimpleProductView {
          price {
            regular { amount { value } }
            final { amount { value } }
          }
        }
        ... on ComplexProductView {
          priceRange {
            minimum {
              regular { amount { value } }
              final { amount { value } }
            }
          }
          options {
            id
            title
            values {
              ... on ProductViewOptionValueSwatch { title value }
            }
          }
        }
      }
"""

DETAIL_ITEMS_SELECTION = "    items {%s    }\n" % PRODUCT_VIEW_SELECTION

# Ranking only: Live Search decides the order, detail comes from the catalog
RANKING_ITEMS_SELECTION = """
    items {
      product { sku }
      productView { sku }
    }
"""

# Product detail page: long copy, stock level, attribute labels and variants
PRODUCT_DETAIL_ITEMS_SELECTION = """
    items {
      productView {
        __typename
        id name sku urlKey inStock stockLevel
        description shortDescription
        images(roles: ["small_image"]) { url label }
        attributes { name label value }
        ... on SimpleProductView {
          price {
            regular { amount { value } }
            final { amount { value } }
          }
        }
        ... on ComplexProductView {
          priceRange {
            minimum {
              regular { amount { value } }
              final { amount { value } }
            }
          }
          options {
            id
            title
            values {
              ... on ProductViewOptionValueSwatch { title value }
            }
          }
          variants {
            product {
              sku
              name
              inStock
              stockLevel
              images(roles: ["small_image"]) { url label }
              price {
                regular { amount { value } }
                final { amount { value } }
              }
            }
            attributes { code label }
          }
        }
      }
    }
"""

FACETS_SELECTION = """
    facets {
      attribute
      title
      type
      buckets {
        ... on ScalarBucket { title count }
        ... on RangeBucket { title count }
      }
    }
"""

SUGGESTION_ITEMS_SELECTION = """
    items {
      product {
        sku
        name
        url_key
        small_image { url }
      }
      productView {
        id
        sku
        name
        urlKey
        price {
          final { amount { value } }
          regular { amount { value } }
        }
        images { url }
      }
    }
"""


def build_product_search_query(*selections: str) -> str:
    """Compose a productSearch query document from selection fragments."""
    return PRODUCT_SEARCH_TEMPLATE % "".join(selections)


CARDS_QUERY = build_product_search_query(PAGING_SELECTION, DETAIL_ITEMS_SELECTION)
CARDS_WITH_FACETS_QUERY = build_product_search_query(PAGING_SELECTION, DETAIL_ITEMS_SELECTION, FACETS_SELECTION)
RANKING_QUERY = build_product_search_query(PAGING_SELECTION, RANKING_ITEMS_SELECTION)
FACETS_QUERY = build_product_search_query(FACETS_SELECTION)
SUGGESTIONS_QUERY = build_product_search_query(SUGGESTION_ITEMS_SELECTION)
PRODUCT_DETAIL_QUERY = build_product_search_query(PRODUCT_DETAIL_ITEMS_SELECTION)
