# 📄 File: marketplace/modules/user_management/domain/services/registration_service.py
# 🧭 Purpose (Layman Explanation):
# Signs a new person up in two steps: first their profile is saved here, then the login service
# is asked to create their username and password. If the second step fails, the first is undone.
# 🧪 Purpose (Technical Summary):
# Two-phase registration orchestrator. Step one reuses UserService.create_user (same email rule
# and cache eviction); step two calls the credential provider synchronously without retry. Any
# failure in step two triggers a compensating delete of the local user before the error propagates.
# 🔗 Dependencies:
# UserService, CredentialProvider port, shared exceptions
# 🔄 Connected Modules / Calls From:
# presentation/api/v1/registration.py, infrastructure/external/auth_service_client.py (implements the port)

import logging
from abc import ABC, abstractmethod
from uuid import UUID

from marketplace.shared.core.exceptions import MarketplaceException

from ..models.user import User, UserDetails
from .user_service import UserService

logger = logging.getLogger(__name__)


class CredentialProvider(ABC):
    """Remote service that owns login credentials."""

    @abstractmethod
    async def create_credentials(self, user_id: UUID, login: str, password: str) -> UUID:
        """
        Register a login and password for a user.

        Args:
            user_id: Id of the locally created user
            login: Requested login
            password: Plain password, sent once over the channel

        Returns:
            UUID: User id as recorded by the credential service

        Raises:
            UpstreamError: If the service rejects the request or cannot be reached
        """
        pass


class RegistrationService:
    """Creates a local user and its remote credentials as one logical step."""

    def __init__(self, user_service: UserService, credential_provider: CredentialProvider):
        self.user_service = user_service
        self.credential_provider = credential_provider

    async def register(self, details: UserDetails, login: str, password: str) -> User:
        """
        Register a new user.

        Returns:
            User: The created user

        Raises:
            ConflictError: If the email is already in use (nothing is created)
            UpstreamError: If the credential service fails (the local user is removed)
        """
        user = await self.user_service.create_user(details)

        try:
            external_id = await self.credential_provider.create_credentials(user.id, login, password)
        except Exception:
            logger.warning(f"Credential creation failed for user {user.id}; removing local user")
            await self._compensate(user.id)
            raise

        if external_id != user.id:
            logger.warning(f"Credential service recorded user {user.id} as {external_id}")

        logger.info(f"User with id: {user.id} registered successfully")
        return user

    async def _compensate(self, user_id: UUID) -> None:
        try:
            await self.user_service.delete_user(user_id)
        except MarketplaceException as cleanup_error:
            logger.error(f"Compensating delete failed for user {user_id}: {cleanup_error.message}")
