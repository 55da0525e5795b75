"""HTTP middleware for request tracking.

Reads or creates X-Request-ID, keeps it in a context variable for error
handlers, and echoes it on the response.
"""

import uuid
from collections.abc import Callable
from contextvars import ContextVar
from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from emoji_rewriter.config.logging import get_logger


log = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

_request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    """Request ID of the request being handled, if any."""
    return _request_id_ctx.get()


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Propagate X-Request-ID through the request."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Any],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        token = _request_id_ctx.set(request_id)
        start_path = request.url.path

        try:
            response: Response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            log.debug(
                "REQUEST method={} path={} status={} request_id={}",
                request.method,
                start_path,
                response.status_code,
                request_id,
            )
            return response
        finally:
            _request_id_ctx.reset(token)
