"""Request id and access logging middleware."""

import logging
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from ulid import ULID

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag every request with an id and write one access log line for it.

    An incoming ``X-Request-ID`` header is reused; otherwise a new ULID is
    generated. The id is stored on ``request.state.request_id`` and echoed
    back in the response header.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(ULID())
        request.state.request_id = request_id
        start = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                f"{request.method} {request.url.path} failed: {type(e).__name__} - {e}",
                extra={"request_id": request_id}
            )
            raise

        duration_ms = (time.perf_counter() - start) * 1000
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            f"{request.method} {request.url} {response.status_code} {duration_ms:.1f}ms",
            extra={
                "request_id": request_id,
                "method": request.method,
                "status_code": response.status_code,
                "size": response.headers.get("content-length"),
                "duration_ms": duration_ms
            }
        )
        return response


def get_request_id(request: Request) -> str:
    """Dependency returning the id assigned by ``RequestContextMiddleware``."""
    return getattr(request.state, "request_id", "")
