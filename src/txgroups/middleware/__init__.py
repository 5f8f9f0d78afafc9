"""
Middleware to add trace_id to each request.

The trace_id ties together every log line written while handling one
request, including the per-attempt logs of retried transactions.
"""

import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from txgroups.core.logging import logger
from txgroups.core.trace_context import trace_id_context

TRACE_ID_HEADER = "X-Trace-ID"


class TraceIDMiddleware(BaseHTTPMiddleware):
    """
    Middleware that assigns a trace_id to each request.

    Flow:
    1. Request arrives: reuse its X-Trace-ID header or generate a UUID
    2. Store the trace_id in contextvars for the log filter
    3. Response includes the X-Trace-ID header
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Processes the request by adding trace_id.

        Args:
            request: HTTP request
            call_next: Next middleware/handler

        Returns:
            Response with X-Trace-ID header
        """
        trace_id = request.headers.get(TRACE_ID_HEADER) or str(uuid.uuid4())
        token = trace_id_context.set(trace_id)

        logger.debug(f"Request started: {request.method} {request.url.path}")

        try:
            response = await call_next(request)
            response.headers[TRACE_ID_HEADER] = trace_id

            logger.info(
                f"Request completed: {request.method} {request.url.path} - Status: {response.status_code}"  # noqa: E501
            )

            return response

        except Exception:
            logger.exception(f"Request failed: {request.method} {request.url.path}")
            raise

        finally:
            trace_id_context.reset(token)


__all__ = ["TRACE_ID_HEADER", "TraceIDMiddleware"]
