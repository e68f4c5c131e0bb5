# 📄 File: marketplace/api/v1/router.py
# 🧭 Purpose (Layman Explanation):
# The traffic director for version 1 of the API: it sends user requests to the user handlers,
# card requests to the card handlers and sign-ups to the registration handler.
# 🧪 Purpose (Technical Summary):
# API v1 router aggregation combining the health router and the user management module routers.
# 🔗 Dependencies:
# FastAPI, marketplace.api.v1.health, marketplace.modules.user_management.presentation.api.v1.*
# 🔄 Connected Modules / Calls From:
# marketplace.main (mounted under settings.API_V1_PREFIX)

import logging

from fastapi import APIRouter

from marketplace.modules.user_management.presentation.api.v1.cards import cards_router
from marketplace.modules.user_management.presentation.api.v1.registration import registration_router
from marketplace.modules.user_management.presentation.api.v1.users import users_router

from .health import health_router

logger = logging.getLogger(__name__)

api_v1_router = APIRouter()

api_v1_router.include_router(health_router)

# =========================================================================
# MODULE ROUTERS
# =========================================================================

api_v1_router.include_router(users_router)
api_v1_router.include_router(cards_router)
api_v1_router.include_router(registration_router)

logger.debug("API v1 router configured: health, users, cards, registration")
