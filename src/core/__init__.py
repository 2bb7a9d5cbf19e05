"""
Core module for cross-cutting concerns.

This module provides:
- Structured logging configuration
- Request tracing middleware
"""

from core.logging import configure_logging, get_logger, truncate_message

__all__ = [
    "configure_logging",
    "get_logger",
    "truncate_message",
]
