# 📄 File: marketplace/api/middleware/logging.py
# 🧭 Purpose (Layman Explanation):
# Keeps a short diary entry for every request: what was asked for, who asked, how it ended
# and how long it took, all tagged with a request number so related log lines can be found.
# 🧪 Purpose (Technical Summary):
# Request logging middleware. Reuses or generates X-Request-ID, binds it to the logging context
# for the whole request, stores it on request.state and echoes it in the response. Logs
# method, path, status and duration; slow requests are logged at warning level.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, marketplace.shared.utils.logging
# 🔄 Connected Modules / Calls From:
# marketplace.main (outermost middleware)

import logging
import time
from typing import Set

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from marketplace.shared.utils.logging import log_context

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Per-request correlation id and access log."""

    def __init__(
        self,
        app: ASGIApp,
        slow_request_threshold: float = 2.0,
        excluded_paths: Set[str] = frozenset({"/health", "/api/v1/health"})
    ):
        super().__init__(app)
        self.slow_request_threshold = slow_request_threshold
        self.excluded_paths = excluded_paths

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or None

        with log_context(request_id=request_id) as context:
            request.state.request_id = context["request_id"]
            start_time = time.perf_counter()

            response = await call_next(request)

            duration = time.perf_counter() - start_time
            response.headers[REQUEST_ID_HEADER] = context["request_id"]

            if request.url.path not in self.excluded_paths:
                self._log_request(request, response.status_code, duration)

        return response

    def _log_request(self, request: Request, status_code: int, duration: float) -> None:
        message = (
            f"{request.method} {request.url.path} -> {status_code} "
            f"in {duration * 1000:.1f}ms"
        )
        extra = {
            "method": request.method,
            "path": request.url.path,
            "status_code": status_code,
            "duration_ms": round(duration * 1000, 1),
        }

        if status_code >= 500:
            logger.error(message, extra=extra)
        elif duration > self.slow_request_threshold:
            logger.warning(f"Slow request: {message}", extra=extra)
        else:
            logger.info(message, extra=extra)
