# 📄 File: marketplace/api/middleware/authentication.py
# 🧭 Purpose (Layman Explanation):
# Looks at the ID card (token) a caller shows, works out who they are and whether they are
# an administrator, and pins that on the request. It never turns anyone away by itself;
# each endpoint decides what a caller is allowed to do.
# 🧪 Purpose (Technical Summary):
# Optional bearer-token authentication. A valid JWT becomes a Principal on request.state.principal
# and the user id is bound to the logging context. Missing or invalid tokens leave the request
# anonymous, so protected operations fail later with 401 from the access guard.
# 🔗 Dependencies:
# starlette BaseHTTPMiddleware, python-jose (through marketplace.shared.core.security)
# 🔄 Connected Modules / Calls From:
# marketplace.main (middleware registration), marketplace.shared.core.dependencies

import logging
from typing import Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from marketplace.shared.core.exceptions import AuthenticationError
from marketplace.shared.core.security import (
    Principal,
    extract_bearer_token,
    get_security_manager,
)
from marketplace.shared.utils.logging import bind_user_id

logger = logging.getLogger(__name__)


class AuthenticationMiddleware(BaseHTTPMiddleware):
    """Resolves the caller from the Authorization header."""

    async def dispatch(self, request: Request, call_next) -> Response:
        principal = self._authenticate(request)
        request.state.principal = principal

        if principal is not None:
            bind_user_id(str(principal.user_id))

        return await call_next(request)

    def _authenticate(self, request: Request) -> Optional[Principal]:
        token = extract_bearer_token(request.headers.get("Authorization"))
        if token is None:
            return None

        try:
            return get_security_manager().verify_token(token)
        except AuthenticationError as e:
            logger.info(f"Ignoring bearer token on {request.url.path}: {e.message}")
            return None
