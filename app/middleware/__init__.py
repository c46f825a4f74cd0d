"""
Middleware modules for the Storefront API
"""

from .correlation_id import CorrelationIdMiddleware, get_correlation_id
from .trace_context import TraceContextMiddleware, get_trace_id, get_span_id

__all__ = [
    "CorrelationIdMiddleware",
    "TraceContextMiddleware",
    "get_correlation_id",
    "get_trace_id",
    "get_span_id",
]
