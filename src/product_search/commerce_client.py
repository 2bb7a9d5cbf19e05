"""
Async GraphQL clients for the Catalog Service and Live Search.

Both backends speak the same GraphQL dialect behind the same kind of
endpoint; they differ in endpoint, API key and what they are good at.
Each client owns one httpx.AsyncClient, shared across requests and closed
on application shutdown.

Failures surface as BackendError: transport errors, non-2xx responses,
non-JSON bodies and GraphQL ``errors`` arrays alike. Nothing is retried.
"""

import threading
from typing import Any, Dict, List, Optional

import httpx

from config.settings import Settings, get_settings
from core.logging import get_logger
from product_search.exceptions import BackendError
from product_search.models import Backend

logger = get_logger(__name__)


class CommerceGraphQLClient:
    """
    Thin GraphQL-over-HTTP client for one commerce backend.

    Args:
        endpoint: GraphQL URL.
        api_key: Sent as X-Api-Key.
        scope_headers: Storefront scope headers (environment, website, store view...).
        timeout: Per-request timeout in seconds.
        transport: Optional httpx transport (tests pass httpx.MockTransport).
    """

    backend: Backend = Backend.CATALOG

    def __init__(
        self,
        endpoint: str,
        api_key: str = "",
        scope_headers: Optional[Dict[str, str]] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not endpoint:
            raise ValueError(f"{self.backend.value} endpoint is required")

        self.endpoint = endpoint
        headers = {"Content-Type": "application/json", **(scope_headers or {})}
        if api_key:
            headers["X-Api-Key"] = api_key

        self._client = httpx.AsyncClient(headers=headers, timeout=timeout, transport=transport)

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    # =========================================================================
    # GraphQL
    # =========================================================================

    async def execute(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a GraphQL document and return its ``data`` object.

        Raises:
            BackendError: On transport failure, HTTP error status, a body that
                is not JSON, or a non-empty ``errors`` array.
        """
        backend = self.backend.value
        try:
            response = await self._client.post(self.endpoint, json={"query": query, "variables": variables})
        except httpx.RequestError as e:
            raise BackendError(backend, f"request failed: {e}") from e

        if response.is_error:
            raise BackendError(backend, f"HTTP {response.status_code}", status_code=response.status_code)

        try:
            payload = response.json()
        except ValueError as e:
            raise BackendError(backend, "response is not JSON", status_code=response.status_code) from e

        errors = payload.get("errors") if isinstance(payload, dict) else None
        if errors:
            first = errors[0].get("message") if isinstance(errors[0], dict) else str(errors[0])
            raise BackendError(backend, first or "GraphQL error", status_code=response.status_code)

        data = payload.get("data") if isinstance(payload, dict) else None
        return data or {}

    async def product_search(
        self,
        query: str,
        phrase: str = "",
        filter: Optional[List[Dict[str, Any]]] = None,
        page_size: Optional[int] = None,
        current_page: Optional[int] = None,
        sort: Any = None,
    ) -> Dict[str, Any]:
        """
        Run ``productSearch`` and return its result object.

        ``sort`` is left out of the variables when None (the catalog's
        "no sort"); an empty list is sent as-is.
        """
        variables: Dict[str, Any] = {"phrase": phrase or "", "filter": filter or []}
        if page_size is not None:
            variables["page_size"] = page_size
        if current_page is not None:
            variables["current_page"] = current_page
        if sort is not None:
            variables["sort"] = sort

        data = await self.execute(query, variables)
        result = data.get("productSearch") or {}

        logger.debug(
            "productSearch finished",
            backend=self.backend.value,
            items=len(result.get("items") or []),
            total_count=result.get("total_count"),
        )
        return result


class CatalogServiceClient(CommerceGraphQLClient):
    """Deterministic browse backend: full product views and facets, no relevance ranking."""

    backend = Backend.CATALOG

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "CatalogServiceClient":
        settings = settings or get_settings()
        return cls(
            endpoint=settings.catalog_service_endpoint,
            api_key=settings.catalog_api_key,
            scope_headers=settings.scope_headers(),
            timeout=settings.request_timeout_seconds,
            transport=transport,
        )


class LiveSearchClient(CommerceGraphQLClient):
    """AI-ranking backend: relevance ordering, typo tolerance."""

    backend = Backend.LIVE_SEARCH

    @classmethod
    def from_settings(
        cls,
        settings: Optional[Settings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> "LiveSearchClient":
        settings = settings or get_settings()
        return cls(
            endpoint=settings.resolved_live_search_endpoint,
            api_key=settings.live_search_api_key,
            scope_headers=settings.scope_headers(),
            timeout=settings.request_timeout_seconds,
            transport=transport,
        )


# =============================================================================
# Singletons
# =============================================================================

_catalog_client: Optional[CatalogServiceClient] = None
_live_search_client: Optional[LiveSearchClient] = None
_clients_lock = threading.Lock()


def get_catalog_client() -> CatalogServiceClient:
    """Get or create the CatalogServiceClient singleton (thread-safe)."""
    global _catalog_client
    if _catalog_client is None:
        with _clients_lock:
            if _catalog_client is None:
                _catalog_client = CatalogServiceClient.from_settings()
    return _catalog_client


def get_live_search_client() -> LiveSearchClient:
    """Get or create the LiveSearchClient singleton (thread-safe)."""
    global _live_search_client
    if _live_search_client is None:
        with _clients_lock:
            if _live_search_client is None:
                _live_search_client = LiveSearchClient.from_settings()
    return _live_search_client


async def close_clients() -> None:
    """Close and forget both singletons. Called on application shutdown."""
    global _catalog_client, _live_search_client
    with _clients_lock:
        clients = [c for c in (_catalog_client, _live_search_client) if c is not None]
        _catalog_client = None
        _live_search_client = None

    for client in clients:
        await client.aclose()
