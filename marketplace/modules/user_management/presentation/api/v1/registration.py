# 📄 File: marketplace/modules/user_management/presentation/api/v1/registration.py
# 🧭 Purpose (Layman Explanation):
# The sign-up address: creates the user here and their login at the separate login service.
#
# 🧪 Purpose (Technical Summary):
# Public registration endpoint delegating to RegistrationService (local create, remote credentials,
# compensating delete on failure). Upstream failures surface as UpstreamError (409 or 500).
#
# 🔗 Dependencies:
# - FastAPI router, status codes
# - marketplace.modules.user_management.presentation.dependencies (registration service, guard)
#
# 🔄 Connected Modules / Calls From:
# - marketplace.api.v1.router (mounted under /api/v1)

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status

from marketplace.shared.core.dependencies import get_optional_principal
from marketplace.shared.core.security import Principal

from marketplace.modules.user_management.application.access_guard import AccessGuard
from marketplace.modules.user_management.application.dto.user_dto import UserDTO, user_to_dto
from marketplace.modules.user_management.domain.services.access_policy import Operation
from marketplace.modules.user_management.domain.services.registration_service import RegistrationService
from marketplace.modules.user_management.presentation.api.schemas.registration_schemas import (
    RegistrationRequest,
)
from marketplace.modules.user_management.presentation.dependencies import (
    get_access_guard,
    get_registration_service,
)

logger = logging.getLogger(__name__)

registration_router = APIRouter(prefix="/registration", tags=["Registration"])


@registration_router.post(
    "/users",
    response_model=UserDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Register user with credentials",
    description="Creates the user and then their login at the credential service.",
    responses={
        201: {"description": "User registered"},
        400: {"description": "Invalid registration data"},
        409: {"description": "Email or login already in use"},
        500: {"description": "Credential service failure; no user was kept"},
    }
)
async def register_user(
    request: RegistrationRequest,
    principal: Optional[Principal] = Depends(get_optional_principal),
    guard: AccessGuard = Depends(get_access_guard),
    registration_service: RegistrationService = Depends(get_registration_service),
) -> UserDTO:
    guard.check(Operation.REGISTER_USER, principal)
    user = await registration_service.register(
        request.to_details(),
        login=request.login,
        password=request.password.get_secret_value(),
    )
    return user_to_dto(user)
