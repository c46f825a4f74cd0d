"""
W3C Trace Context Middleware
Extracts or generates the traceparent header and echoes the trace context back
"""

import re
import uuid
from contextvars import ContextVar
from typing import NamedTuple, Optional

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

TRACEPARENT_PATTERN = re.compile(r'^00-([0-9a-f]{32})-([0-9a-f]{16})-([0-9a-f]{2})$')

trace_id_ctx: ContextVar[Optional[str]] = ContextVar("trace_id", default=None)
span_id_ctx: ContextVar[Optional[str]] = ContextVar("span_id", default=None)


class TraceContext(NamedTuple):
    trace_id: str
    span_id: str
    flags: str = "01"

    def to_header(self) -> str:
        return f"00-{self.trace_id}-{self.span_id}-{self.flags}"


def get_trace_id() -> Optional[str]:
    """Get the trace ID from the current context"""
    return trace_id_ctx.get()


def get_span_id() -> Optional[str]:
    """Get the span ID from the current context"""
    return span_id_ctx.get()


def parse_traceparent(traceparent: Optional[str]) -> Optional[TraceContext]:
    """
    Parse a W3C traceparent header.
    Format: 00-{32-hex-traceId}-{16-hex-spanId}-{2-hex-flags}

    Returns None for missing, malformed or all-zero identifiers.
    """
    if not traceparent:
        return None

    match = TRACEPARENT_PATTERN.match(traceparent.strip().lower())
    if not match:
        return None

    trace_id, span_id, flags = match.groups()
    if trace_id == "0" * 32 or span_id == "0" * 16:
        return None
    return TraceContext(trace_id, span_id, flags)


def new_trace_context() -> TraceContext:
    return TraceContext(uuid.uuid4().hex, uuid.uuid4().hex[:16])


class TraceContextMiddleware(BaseHTTPMiddleware):
    """
    Stores the incoming (or a freshly generated) trace context for the request
    and returns it in the traceparent / X-Trace-ID response headers.
    """

    async def dispatch(self, request: Request, call_next):
        context = parse_traceparent(request.headers.get("traceparent")) or new_trace_context()

        trace_id_ctx.set(context.trace_id)
        span_id_ctx.set(context.span_id)
        request.state.trace_id = context.trace_id

        response = await call_next(request)

        response.headers["traceparent"] = context.to_header()
        response.headers["X-Trace-ID"] = context.trace_id
        tracestate = request.headers.get("tracestate")
        if tracestate:
            response.headers["tracestate"] = tracestate

        return response
