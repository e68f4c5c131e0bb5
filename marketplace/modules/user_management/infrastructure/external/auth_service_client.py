# 📄 File: marketplace/modules/user_management/infrastructure/external/auth_service_client.py
# 🧭 Purpose (Layman Explanation):
# Talks to the separate login service to create a username and password for a newly registered user.
#
# 🧪 Purpose (Technical Summary):
# CredentialProvider implementation that POSTs {userId, login, password} to
# {AUTH_SERVICE_URL}/api/v1/auth/credentials and reads {"userId": <uuid>} back.
# Non-2xx responses surface as UpstreamError with the upstream message and status.
#
# 🔗 Dependencies:
# - marketplace.shared.infrastructure.external_apis.api_client (aiohttp client)
# - marketplace.shared.config.settings (service URL and timeout)
#
# 🔄 Connected Modules / Calls From:
# - RegistrationService (through the CredentialProvider port)
# - presentation/dependencies.py (provider), marketplace/main.py (shutdown)

import logging
from typing import Optional
from uuid import UUID

from marketplace.shared.config.settings import get_settings
from marketplace.shared.core.exceptions import UpstreamError
from marketplace.shared.infrastructure.external_apis.api_client import APIClient
from marketplace.modules.user_management.domain.services.registration_service import CredentialProvider

logger = logging.getLogger(__name__)

CREDENTIALS_ENDPOINT = "/api/v1/auth/credentials"


class AuthServiceClient(CredentialProvider):
    """Credential service client."""

    def __init__(self, api_client: APIClient):
        self.api_client = api_client

    async def create_credentials(self, user_id: UUID, login: str, password: str) -> UUID:
        logger.debug(f"Requesting credentials for user {user_id}")
        payload = {"userId": str(user_id), "login": login, "password": password}

        response = await self.api_client.post(CREDENTIALS_ENDPOINT, data=payload)

        try:
            return UUID(str(response["userId"]))
        except (KeyError, TypeError, ValueError):
            logger.error(f"Credential service response for user {user_id} has no valid userId")
            raise UpstreamError(
                "Credential service returned an invalid response",
                service_name=self.api_client.api_name
            )

    async def close(self) -> None:
        await self.api_client.close()


_auth_service_client: Optional[AuthServiceClient] = None


def get_auth_service_client() -> AuthServiceClient:
    """Process wide client sharing one aiohttp session."""
    global _auth_service_client
    if _auth_service_client is None:
        settings = get_settings()
        _auth_service_client = AuthServiceClient(
            APIClient(
                base_url=settings.AUTH_SERVICE_URL,
                api_name="auth-service",
                timeout=settings.AUTH_SERVICE_TIMEOUT,
            )
        )
    return _auth_service_client


async def close_auth_service_client() -> None:
    global _auth_service_client
    if _auth_service_client is not None:
        await _auth_service_client.close()
        _auth_service_client = None
