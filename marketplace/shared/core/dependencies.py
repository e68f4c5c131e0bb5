# 📄 File: marketplace/shared/core/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Small helpers every endpoint can ask for to learn who is calling.
# 🧪 Purpose (Technical Summary):
# Shared FastAPI dependency reading the Principal set by AuthenticationMiddleware.
# Enforcement happens in the AccessGuard, which raises AuthenticationError.
# 🔗 Dependencies:
# FastAPI, marketplace.shared.core.security
# 🔄 Connected Modules / Calls From:
# marketplace.modules.user_management.presentation (routers and dependencies)

from typing import Optional

from fastapi import Request

from .security import Principal


async def get_optional_principal(request: Request) -> Optional[Principal]:
    """
    Get the caller from request state, or None for anonymous requests.

    AuthenticationMiddleware stores the Principal when a valid bearer token is present.
    """
    return getattr(request.state, "principal", None)
