# leadcapture/middleware/request_id.py
from __future__ import annotations

import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from leadcapture.core.logging import request_log_context

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Binds a request ID, method and path to the log context of a request."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        with request_log_context(request_id, method=request.method, path=request.url.path):
            response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
