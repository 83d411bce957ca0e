"""CLI utilities for running async operations and formatting output."""

from book_service.cli.utils.async_runner import coro
from book_service.cli.utils.formatters import error, info, success

__all__ = ["coro", "error", "info", "success"]
