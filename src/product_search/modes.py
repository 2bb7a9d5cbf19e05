"""
Mode selection: decide whether Live Search participates in a request.

A shopper who typed something gets AI relevance ranking (SEARCH); a shopper
browsing a category or a filtered listing is served by the Catalog Service
alone (BROWSE), which is faster and fully deterministic.
"""

from typing import Optional

from product_search.models import SearchMode, SearchRequest


def has_search_phrase(phrase: Optional[str]) -> bool:
    return bool(phrase and phrase.strip())


def select_mode(request: SearchRequest) -> SearchMode:
    """SEARCH when the trimmed phrase is non-empty, BROWSE otherwise."""
    if has_search_phrase(request.phrase):
        return SearchMode.SEARCH
    return SearchMode.BROWSE
