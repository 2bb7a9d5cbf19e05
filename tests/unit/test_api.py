"""
Tests for the HTTP surface (FastAPI routes).
"""

from product_search.exceptions import BackendError


class TestHealth:
    """Tests for health endpoints."""

    async def test_health(self, async_client):
        response = await async_client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_request_id_echoed(self, async_client):
        response = await async_client.get("/live", headers={"X-Request-ID": "abc123"})

        assert response.json() == {"status": "alive"}
        assert response.headers["X-Request-ID"] == "abc123"


class TestProductCardsRoute:
    """Tests for POST /api/products/cards."""

    async def test_returns_camel_case_envelope(
        self, async_client, mock_catalog_client, make_product_view, make_backend_result,
    ):
        mock_catalog_client.product_search.return_value = make_backend_result(
            [make_product_view(sku="A", regular=100.0, final=75.0)], total_count=1
        )

        response = await async_client.post(
            "/api/products/cards",
            json={"filter": {"categoryUrlKey": "phones"}, "sort": {"attribute": "PRICE"}, "limit": 12},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["totalCount"] == 1
        assert data["hasMoreItems"] is False
        assert data["currentPage"] == 1
        assert data["items"][0]["sku"] == "A"
        assert data["items"][0]["discountPercent"] == 25
        assert data["items"][0]["originalPrice"] == "$100.00"
        assert mock_catalog_client.product_search.call_args.kwargs["filter"] == [
            {"attribute": "categoryPath", "in": ["phones"]}
        ]

    async def test_backend_failure_is_502(self, async_client, mock_catalog_client):
        mock_catalog_client.product_search.side_effect = BackendError("catalog", "HTTP 500", status_code=500)

        response = await async_client.post("/api/products/cards", json={})

        assert response.status_code == 502
        assert "catalog" in response.json()["detail"]

    async def test_invalid_page_rejected(self, async_client):
        response = await async_client.post("/api/products/cards", json={"page": 0})

        assert response.status_code == 422


class TestProductSearchRoute:
    """Tests for POST /api/products/search."""

    async def test_failure_is_empty_200(self, async_client, mock_live_search_client):
        mock_live_search_client.product_search.side_effect = BackendError("live_search", "down")

        response = await async_client.post("/api/products/search", json={"phrase": "phone", "limit": 10})

        assert response.status_code == 200
        data = response.json()
        assert data["totalCount"] == 0
        assert data["products"]["items"] == []
        assert data["products"]["page_info"] == {"current_page": 1, "page_size": 10, "total_pages": 0}
        assert data["facets"] == {"facets": [], "totalCount": 0}


class TestFacetsAndSuggestionsRoutes:
    """Tests for facets and suggestions endpoints."""

    async def test_facets(self, async_client, mock_catalog_client, sample_raw_facets):
        mock_catalog_client.product_search.return_value = {"facets": sample_raw_facets}

        response = await async_client.post("/api/products/facets", json={})

        assert response.status_code == 200
        facets = response.json()["facets"]
        assert facets[0]["key"] == "manufacturer"
        assert facets[0]["attributeCode"] == "cs_manufacturer"
        assert facets[0]["type"] == "checkbox"

    async def test_suggestions(self, async_client, mock_live_search_client):
        mock_live_search_client.product_search.return_value = {
            "items": [{"product": {"sku": "IP15", "name": "iPhone 15"}, "productView": {"urlKey": "iphone-15"}}]
        }

        response = await async_client.get("/api/products/suggestions", params={"phrase": "iph"})

        assert response.status_code == 200
        data = response.json()
        assert data["phrase"] == "iph"
        assert data["suggestions"][0]["urlKey"] == "iphone-15"

    async def test_short_phrase(self, async_client, mock_live_search_client):
        response = await async_client.get("/api/products/suggestions", params={"phrase": "i"})

        assert response.json()["suggestions"] == []
        mock_live_search_client.product_search.assert_not_awaited()


class TestProductDetailRoute:
    """Tests for GET /api/products/detail/{url_key}."""

    async def test_returns_detail(self, async_client, mock_catalog_client, make_product_view, make_backend_result):
        mock_catalog_client.product_search.return_value = make_backend_result(
            [make_product_view(shortDescription="Short copy", stockLevel=3)]
        )

        response = await async_client.get("/api/products/detail/iphone-15")

        assert response.status_code == 200
        data = response.json()
        assert data["sku"] == "IPHONE-15"
        assert data["shortDescription"] == "Short copy"
        assert data["stockLevel"] == 3.0
        assert data["breadcrumbs"][0] == {"name": "Products", "urlPath": "/products"}

    async def test_unknown_url_key_is_404(self, async_client, mock_catalog_client, make_backend_result):
        mock_catalog_client.product_search.return_value = make_backend_result([])

        response = await async_client.get("/api/products/detail/missing")

        assert response.status_code == 404

    async def test_backend_failure_is_502(self, async_client, mock_catalog_client):
        mock_catalog_client.product_search.side_effect = BackendError("catalog", "HTTP 500", status_code=500)

        response = await async_client.get("/api/products/detail/iphone-15")

        assert response.status_code == 502
        assert "catalog" in response.json()["detail"]
