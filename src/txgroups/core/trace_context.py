"""Per-request trace id, shared by the middleware and the log filter."""

import contextvars

trace_id_context: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "trace_id", default=None
)


def current_trace_id() -> str:
    """Trace id of the current request, or "N/A" outside a request."""
    return trace_id_context.get() or "N/A"
