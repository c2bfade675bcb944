"""Request context middleware."""

import time
import uuid
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from file_processor.utils.logging import log_request, request_id_var

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with an id and write one access log line for it.

    The caller's ``X-Request-ID`` is reused when present. The id is visible
    to every log record written while the request is handled, and is echoed
    back with the elapsed time in seconds.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        token = request_id_var.set(request_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed = time.perf_counter() - started

            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers[PROCESS_TIME_HEADER] = f"{elapsed:.4f}"
            log_request(request.method, request.url.path, response.status_code, elapsed * 1000)
            return response
        finally:
            request_id_var.reset(token)
