"""Request handler capability interface and concrete handler variants.

This package provides:
- RequestHandler: Abstract base with ``can_handle`` and ``handle``
- RequestInterceptor / ResponseInterceptor: Hooks bundled into a chain
- FunctionRequestHandler: Handler built from a predicate and a function
"""

from __future__ import annotations

from .base import RequestHandler, RequestInterceptor, ResponseInterceptor
from .function import FunctionRequestHandler

__all__ = [
    "RequestHandler",
    "RequestInterceptor",
    "ResponseInterceptor",
    "FunctionRequestHandler",
]
