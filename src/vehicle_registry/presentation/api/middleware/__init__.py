"""Middleware module for vehicle registry API."""

from .auth import get_current_administrator
from .logging import RequestResponseLoggingMiddleware

__all__ = [
    "get_current_administrator",
    "RequestResponseLoggingMiddleware"
]
