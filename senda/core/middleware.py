import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("senda.requests")


class LatencyMonitorMiddleware(BaseHTTPMiddleware):
    """
    Adds X-Process-Time to every response.

    Geocoding requests may walk the whole strategy ladder (several Nominatim
    calls plus one Gemini call), so slow responses are logged for follow-up.
    """

    def __init__(self, app, slow_threshold: float = 5.0):
        super().__init__(app)
        self.slow_threshold = slow_threshold

    async def dispatch(self, request: Request, call_next):
        start_time = time.perf_counter()

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        response.headers["X-Process-Time"] = str(process_time)

        if process_time > self.slow_threshold:
            logger.warning(
                f"SLOW_REQUEST | path={request.url.path} | duration={process_time:.3f}s"
            )
        return response


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add X-Request-ID header for distributed tracing.

    If the client sends X-Request-ID, it is preserved.
    Otherwise, a new UUID is generated.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID")
        if not request_id:
            request_id = str(uuid.uuid4())

        request.state.request_id = request_id

        logger.info(
            f"REQUEST | id={request_id} | method={request.method} | path={request.url.path}"
        )

        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        return response
