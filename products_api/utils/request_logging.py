import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("products_api.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request as ``METHOD path status duration ms - length``."""

    async def dispatch(self, request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000

        length = response.headers.get("content-length", "-")
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} "
            f"{elapsed_ms:.3f} ms - {length}"
        )
        return response
