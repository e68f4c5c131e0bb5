# 📄 File: marketplace/api/middleware/error_handling.py
# 🧭 Purpose (Layman Explanation):
# The safety net: if something breaks in a way nobody planned for, the caller still gets a tidy
# "internal error" message instead of a crash, and the full problem is written to the log.
# 🧪 Purpose (Technical Summary):
# Catches exceptions that escape the FastAPI exception handlers (anything that is not a
# MarketplaceException or a request validation error), logs them with traceback and returns the
# standard error body with code INTERNAL_ERROR. Also hosts create_error_response, the single
# builder of the {"error": {...}} body used by the application exception handlers.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, marketplace.shared.core.exceptions, marketplace.shared.config.settings
# 🔄 Connected Modules / Calls From:
# marketplace.main (middleware and exception handler registration)

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from marketplace.shared.config.settings import get_settings

logger = logging.getLogger(__name__)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Last-resort handler turning unexpected exceptions into a 500 response."""

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            request_id = getattr(request.state, "request_id", None)
            logger.exception(
                f"Unhandled error on {request.method} {request.url.path}: "
                f"{type(exc).__name__}: {exc}"
            )

            details: Dict[str, Any] = {}
            if get_settings().DEBUG:
                details["exception"] = type(exc).__name__

            return create_error_response(
                error_code="INTERNAL_ERROR",
                message="An unexpected error occurred",
                status_code=500,
                details=details,
                request_id=request_id
            )


def create_error_response(
    error_code: str,
    message: str,
    status_code: int = 500,
    details: Optional[Dict[str, Any]] = None,
    request_id: Optional[str] = None
) -> JSONResponse:
    """
    Create the standard error response.

    Args:
        error_code: Machine readable error code
        message: Human readable message
        status_code: HTTP status code
        details: Additional error details
        request_id: Correlation id of the request

    Returns:
        JSONResponse: {"error": {code, message, details, timestamp, request_id}}
    """
    response = JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "code": error_code,
                "message": message,
                "details": details or {},
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "request_id": request_id
            }
        }
    )

    if request_id:
        response.headers["X-Request-ID"] = request_id

    return response
