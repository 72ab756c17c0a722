import logging
from typing import Iterable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse

logger = logging.getLogger(__name__)

CORS_REJECTED = "Not allowed by CORS"


def is_origin_allowed(origin: Optional[str], allowed_origins: Iterable[str]) -> bool:
    """
    Check a request's declared origin against the allow-list.

    Origins compare without a trailing slash. An empty origin is never
    allowed.
    """
    if not origin:
        return False
    origin = origin.rstrip("/")
    return any(origin == allowed.rstrip("/") for allowed in allowed_origins)


class OriginAllowListMiddleware(BaseHTTPMiddleware):
    """
    Reject cross-origin requests whose origin is not on the allow-list.

    Requests without an Origin header are same-origin or non-browser calls
    and are passed through. Rejections are plain text 403 responses so they
    can't be confused with the API's JSON errors.
    """

    def __init__(self, app, allowed_origins: Iterable[str]):
        super().__init__(app)
        self.allowed_origins = list(allowed_origins)

    async def dispatch(self, request: Request, call_next):
        origin = request.headers.get("origin")
        if origin is not None and not is_origin_allowed(origin, self.allowed_origins):
            logger.warning(f"Rejected {request.method} {request.url.path} from origin {origin}")
            return PlainTextResponse(CORS_REJECTED, status_code=403)
        return await call_next(request)
