"""FastAPI middleware for trace_id propagation and access logging."""
from __future__ import annotations

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from app.core.trace_context import clear_trace_id, generate_trace_id, set_trace_id

logger = logging.getLogger(__name__)

TRACE_HEADER = "X-Trace-Id"


class TraceIdMiddleware(BaseHTTPMiddleware):
    """Read or create X-Trace-Id, echo it back, and write one access log line."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        trace_id = request.headers.get(TRACE_HEADER) or generate_trace_id()
        set_trace_id(trace_id)

        start_time = time.time()
        client_ip = request.client.host if request.client else "unknown"

        try:
            response = await call_next(request)

            latency_ms = int((time.time() - start_time) * 1000)
            response.headers[TRACE_HEADER] = trace_id

            logger.info(
                f"ACCESS {request.method} {request.url.path} "
                f"status={response.status_code} "
                f"latency_ms={latency_ms} "
                f"client_ip={client_ip}"
            )
            return response

        except Exception as e:
            latency_ms = int((time.time() - start_time) * 1000)
            logger.error(
                f"ACCESS {request.method} {request.url.path} "
                f"status=500 "
                f"latency_ms={latency_ms} "
                f"client_ip={client_ip} "
                f"error={str(e)}",
                exc_info=True,
            )
            # Let FastAPI's error handling produce the response
            raise

        finally:
            clear_trace_id()
