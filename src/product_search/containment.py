"""
Failure containment for the public capabilities.

Each capability has an explicit policy for backend (or any other) failure:

    RAISE  log, then re-raise so the caller sees the error
    EMPTY  log, then return the capability's empty response

The table below is the single place the choice is made; the service applies
it with the ``contain_failures`` decorator. Logged error text is truncated.
"""

import functools
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from config.settings import Settings, get_settings
from core.logging import get_logger, truncate_message

logger = get_logger(__name__)

T = TypeVar("T")


class FailurePolicy(str, Enum):
    RAISE = "raise"
    EMPTY = "empty"


class Capability(str, Enum):
    PRODUCT_CARDS = "product_cards"
    PRODUCT_SEARCH_FILTER = "product_search_filter"
    PRODUCT_FACETS = "product_facets"
    SEARCH_SUGGESTIONS = "search_suggestions"
    PRODUCT_DETAIL = "product_detail"


CAPABILITY_POLICIES: Dict[Capability, FailurePolicy] = {
    Capability.PRODUCT_CARDS: FailurePolicy.RAISE,
    Capability.PRODUCT_SEARCH_FILTER: FailurePolicy.EMPTY,
    Capability.PRODUCT_FACETS: FailurePolicy.EMPTY,
    Capability.SEARCH_SUGGESTIONS: FailurePolicy.EMPTY,
    Capability.PRODUCT_DETAIL: FailurePolicy.RAISE,
}

_EVENT_NAMES: Dict[Capability, str] = {
    Capability.PRODUCT_CARDS: "Product cards error",
    Capability.PRODUCT_SEARCH_FILTER: "Product search filter error",
    Capability.PRODUCT_FACETS: "Product facets error",
    Capability.SEARCH_SUGGESTIONS: "Search suggestions error",
    Capability.PRODUCT_DETAIL: "Product detail error",
}


def _message_limit(args: tuple) -> int:
    """Log limit from the bound service's settings, else the process settings."""
    settings = getattr(args[0], "settings", None) if args else None
    if isinstance(settings, Settings):
        return settings.log_message_limit
    return get_settings().log_message_limit


def contain_failures(
    capability: Capability,
    fallback: Optional[Callable[..., Any]] = None,
    policy: Optional[FailurePolicy] = None,
    message_limit: Optional[int] = None,
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Wrap an async capability with its failure policy.

    Args:
        capability: Which capability is wrapped; selects the policy.
        fallback: Called with the wrapped function's arguments to build the
            empty response. Required for EMPTY.
        policy: Override the table entry (tests).
        message_limit: Max logged error characters (default: the service's
            settings.log_message_limit).
    """
    resolved_policy = policy or CAPABILITY_POLICIES[capability]
    if resolved_policy == FailurePolicy.EMPTY and fallback is None:
        raise ValueError(f"{capability.value}: EMPTY policy needs a fallback")

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> T:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                limit = message_limit or _message_limit(args)
                logger.error(
                    _EVENT_NAMES[capability],
                    capability=capability.value,
                    policy=resolved_policy.value,
                    error_type=type(e).__name__,
                    error=truncate_message(str(e), limit),
                )
                if resolved_policy == FailurePolicy.RAISE:
                    raise
                return fallback(*args, **kwargs)

        wrapper.failure_policy = resolved_policy
        return wrapper

    return decorator
