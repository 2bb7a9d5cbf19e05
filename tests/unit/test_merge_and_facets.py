"""
Tests for the rank-preserving merge, facet transformation and response assembly.
"""

from product_search.assembler import (
    assemble_cards_response,
    assemble_search_filter_response,
    build_page_info,
    empty_search_filter_response,
)
from product_search.executors import QueryResult
from product_search.facets import transform_facets
from product_search.merge import extract_ranked_skus, index_by_sku, merge_ranked_results
from product_search.models import SearchRequest


class TestMerge:
    """Tests for merging Live Search ranking with catalog detail."""

    def test_extract_ranked_skus_prefers_product_view(self):
        items = [
            {"productView": {"sku": "A"}, "product": {"sku": "legacy-A"}},
            {"product": {"sku": "B"}},
            {"productView": {"sku": ""}, "product": {}},
            None,
            {"productView": None, "product": {"sku": "C"}},
        ]

        assert extract_ranked_skus(items) == ["A", "B", "C"]

    def test_index_by_sku(self):
        items = [{"productView": {"sku": "A", "name": "a"}}, {"productView": {}}, {"productView": None}, "junk"]

        assert index_by_sku(items) == {"A": {"sku": "A", "name": "a"}}

    def test_merge_follows_ranking_order(self):
        details = {sku: {"sku": sku} for sku in ["C", "A", "B"]}

        merged = merge_ranked_results(["B", "A", "C"], details)

        assert [d["sku"] for d in merged] == ["B", "A", "C"]

    def test_merge_drops_unknown_skus(self):
        details = {"A": {"sku": "A"}, "C": {"sku": "C"}}
        ranking = ["X", "C", "Y", "A"]

        merged = merge_ranked_results(ranking, details)

        assert merged == [details[s] for s in ranking if s in details]

    def test_merge_empty(self):
        assert merge_ranked_results([], {"A": {"sku": "A"}}) == []
        assert merge_ranked_results(["A"], {}) == []


class TestTransformFacets:
    """Tests for backend facet -> storefront facet."""

    def test_transform(self, sample_raw_facets):
        facets = transform_facets(sample_raw_facets)

        manufacturer, price = facets
        assert manufacturer.key == "manufacturer"
        assert manufacturer.attribute_code == "cs_manufacturer"
        assert manufacturer.title == "Manufacturer"
        assert manufacturer.type == "checkbox"
        assert [(o.id, o.name, o.count) for o in manufacturer.options] == [
            ("Apple", "Apple", 12),
            ("Samsung", "Samsung", 7),
        ]
        assert price.type == "radio"
        assert price.options[1].count == 0

    def test_title_falls_back_to_key(self):
        facets = transform_facets([{"attribute": "cs_memory", "type": "SCALAR", "buckets": []}])

        assert facets[0].title == "storage"
        assert facets[0].options == []

    def test_missing_input(self):
        assert transform_facets(None) == []
        assert transform_facets([]) == []
        assert transform_facets(["junk", None]) == []


class TestAssembler:
    """Tests for paging math and envelopes."""

    def test_page_info_prefers_backend(self):
        page_info = build_page_info(
            {"current_page": 2, "page_size": 12, "total_pages": 5},
            SearchRequest(page=3, limit=48),
        )

        assert (page_info.current_page, page_info.page_size, page_info.total_pages) == (2, 12, 5)

    def test_page_info_falls_back_to_request_then_defaults(self):
        from_request = build_page_info({}, SearchRequest(page=3, limit=48))
        defaults = build_page_info(None, SearchRequest())

        assert (from_request.current_page, from_request.page_size, from_request.total_pages) == (3, 48, 1)
        assert (defaults.current_page, defaults.page_size, defaults.total_pages) == (1, 24, 1)

    def test_has_more_items(self):
        request = SearchRequest()

        last_page = assemble_cards_response(
            QueryResult(page_info={"current_page": 2, "total_pages": 2}), request
        )
        first_of_three = assemble_cards_response(
            QueryResult(page_info={"current_page": 1, "total_pages": 3}), request
        )

        assert last_page.has_more_items is False
        assert first_of_three.has_more_items is True

    def test_search_filter_envelope_shares_total_count(self, sample_raw_facets):
        result = QueryResult(total_count=42, facets=transform_facets(sample_raw_facets))

        response = assemble_search_filter_response(result, SearchRequest())

        assert response.total_count == 42
        assert response.products.total_count == 42
        assert response.facets.total_count == 42
        assert len(response.facets.facets) == 2

    def test_empty_envelope(self):
        response = empty_search_filter_response(SearchRequest(limit=12))
        data = response.model_dump(by_alias=True)

        assert data == {
            "products": {
                "items": [],
                "totalCount": 0,
                "hasMoreItems": False,
                "currentPage": 1,
                "page_info": {"current_page": 1, "page_size": 12, "total_pages": 0},
            },
            "facets": {"facets": [], "totalCount": 0},
            "totalCount": 0,
        }

    def test_empty_envelope_default_page_size(self):
        assert empty_search_filter_response(SearchRequest()).products.page_info.page_size == 24
        assert empty_search_filter_response(None).products.page_info.page_size == 24
