"""
Structured logging configuration using structlog.

Development gets a colored console renderer, production gets one JSON object
per line. Request-scoped values (request id, capability, search mode) are
carried through contextvars so every event emitted while serving a request
is correlated.

Usage:
    from core.logging import configure_logging, get_logger

    configure_logging(json_logs=False)   # Development
    configure_logging(json_logs=True)    # Production

    logger = get_logger(__name__)
    logger.info("Catalog query finished", items=12, total_count=48)
    logger.error("Backend call failed", error=truncate_message(str(e)))
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.types import Processor

# Error text is truncated to this many characters unless the caller says otherwise.
DEFAULT_MESSAGE_LIMIT = 60


def configure_logging(
    json_logs: bool = False,
    log_level: str = "INFO",
    include_timestamp: bool = True,
) -> None:
    """
    Configure structlog and the standard library root logger.

    Args:
        json_logs: Render JSON (production) instead of colored console output.
        log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        include_timestamp: Prefix each event with an ISO timestamp.
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if include_timestamp:
        shared_processors.insert(0, structlog.processors.TimeStamper(fmt="iso"))

    if json_logs:
        shared_processors.append(structlog.processors.format_exc_info)
        shared_processors.append(structlog.processors.JSONRenderer())
    else:
        shared_processors.append(structlog.dev.ConsoleRenderer(
            colors=True,
            exception_formatter=structlog.dev.plain_traceback,
        ))

    structlog.configure(
        processors=shared_processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    # Backend clients log every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger instance.

    Args:
        name: Logger name (typically __name__).

    Returns:
        A structlog BoundLogger instance
    """
    return structlog.get_logger(name)


def truncate_message(message: Any, limit: int = DEFAULT_MESSAGE_LIMIT) -> str:
    """
    Bound a message to ``limit`` characters for logging.

    Backend error bodies can be arbitrarily large (full GraphQL error
    payloads, HTML error pages), so only a prefix is ever logged.
    """
    text = "" if message is None else str(message)
    if limit <= 0:
        return ""
    return text[:limit]


def bind_context(**kwargs: Any) -> None:
    """
    Bind context variables to all subsequent logs in the current context.

    Usage:
        bind_context(request_id="abc", capability="product_cards")
        logger.info("Processing")  # includes request_id and capability
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables (call at the end of a request)."""
    structlog.contextvars.clear_contextvars()


def unbind_context(*keys: str) -> None:
    """Unbind specific context variables."""
    structlog.contextvars.unbind_contextvars(*keys)
