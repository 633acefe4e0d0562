"""Log every request (method, path, query, status, duration) and feed the status counters."""
import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from nextbus.monitoring.metrics import record_request

logger = logging.getLogger(__name__)

RESPONSE_TIME_HEADER = "X-Response-Time-Ms"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000
        record_request(response.status_code)
        response.headers[RESPONSE_TIME_HEADER] = f"{duration_ms:.1f}"
        logger.info(
            "request method=%s path=%s query=%s status=%s duration_ms=%.1f",
            request.method,
            request.url.path,
            request.url.query,
            response.status_code,
            duration_ms,
        )
        return response
