# 📄 File: marketplace/modules/user_management/domain/services/user_service.py
# 🧭 Purpose (Layman Explanation):
# This file contains the business rules for users: no two users may share an email,
# you cannot change or delete someone who does not exist, and remembered answers are
# thrown away whenever a user changes.
# 🧪 Purpose (Technical Summary):
# Domain service for the user lifecycle: uniqueness enforcement, not-found checks,
# read-through caching of user-with-cards and birthday results, and explicit cache
# eviction on every mutation. "Today" comes from the injected clock.
# 🔗 Dependencies:
# User domain models, UserRepository, CardRepository, CacheBackend, Clock, shared exceptions
# 🔄 Connected Modules / Calls From:
# Presentation routers (users.py), RegistrationService, presentation dependencies

import logging
from typing import List, Optional
from uuid import UUID

import pydantic

from marketplace.shared.config.redis import CacheConfig
from marketplace.shared.core.clock import Clock
from marketplace.shared.core.exceptions import ConflictError, NotFoundError, ValidationError
from marketplace.shared.infrastructure.cache.base import CacheBackend

from ..models.page import Page, PageRequest
from ..models.user import User, UserDetails
from ..models.user_with_cards import UserWithCards
from ..repositories.card_repository import CardRepository
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """
    Domain service for user management business logic.

    Every mutation states its cache evictions explicitly:
    - create: birthday cache
    - update: the user's entry and the birthday cache
    - delete: the user's entry, the birthday cache and the expired-card cache
      (the user's cards go with them)
    """

    def __init__(
        self,
        user_repository: UserRepository,
        card_repository: CardRepository,
        cache: CacheBackend,
        clock: Clock,
    ):
        self.user_repository = user_repository
        self.card_repository = card_repository
        self.cache = cache
        self.clock = clock

    # =========================================================================
    # USER LIFECYCLE
    # =========================================================================

    async def create_user(self, details: UserDetails) -> User:
        """
        Create a new user.

        Args:
            details: Submitted user fields

        Returns:
            User: Created user domain model

        Raises:
            ConflictError: If the email is already in use
        """
        logger.debug(f"Attempting to create user with email: {details.email}")
        self._validate_birth_date(details)

        if await self.user_repository.find_by_email(details.email) is not None:
            logger.warning(f"User creation failed: email {details.email} already exists")
            raise ConflictError(
                f"User with email {details.email} already exists.",
                resource_type="user",
                conflict_field="email",
                existing_value=details.email
            )

        user = await self.user_repository.save(details.to_user())
        await self.cache.evict_all(CacheConfig.USERS_WITH_BIRTHDAY_TODAY)

        logger.info(f"User with id: {user.id} created successfully")
        return user

    async def update_user(self, user_id: UUID, details: UserDetails) -> User:
        """
        Replace every mutable field of an existing user.

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If the new email belongs to another user
        """
        logger.debug(f"Attempting to update user with id: {user_id}")
        self._validate_birth_date(details)

        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            logger.warning(f"User update failed: user with id {user_id} not found")
            raise self._user_not_found(user_id)

        if not user.has_email(details.email):
            owner = await self.user_repository.find_by_email(details.email)
            if owner is not None and owner.id != user_id:
                logger.warning(f"User update failed: email {details.email} already exists")
                raise ConflictError(
                    f"User with email {details.email} already exists.",
                    resource_type="user",
                    conflict_field="email",
                    existing_value=details.email
                )

        user.apply_changes(
            name=details.name,
            surname=details.surname,
            birth_date=details.birth_date,
            email=details.email,
        )
        updated = await self.user_repository.save(user)
        await self._evict_user(user_id)

        logger.info(f"User with id: {user_id} updated successfully")
        return updated

    async def delete_user(self, user_id: UUID) -> None:
        """
        Delete a user.

        Raises:
            NotFoundError: If the user does not exist; nothing is written
        """
        logger.debug(f"Attempting to delete user with id: {user_id}")

        if not await self.user_repository.exists_by_id(user_id):
            logger.warning(f"User deletion failed: user with id {user_id} not found")
            raise self._user_not_found(user_id)

        await self.user_repository.delete_by_id(user_id)
        await self._evict_user(user_id)
        await self.cache.evict_all(CacheConfig.EXPIRED_CARDS)

        logger.info(f"User with id: {user_id} deleted successfully")

    # =========================================================================
    # QUERIES
    # =========================================================================

    async def get_user_by_id(self, user_id: UUID) -> UserWithCards:
        """
        Fetch a user with their cards, served from the ``users`` cache when possible.

        Raises:
            NotFoundError: If the user does not exist
        """
        cached = await self.cache.get(CacheConfig.USERS, str(user_id))
        if cached is not None:
            try:
                result = UserWithCards.model_validate(cached)
            except pydantic.ValidationError as e:
                logger.warning(f"Discarding unreadable cache entry for user with id: {user_id}: {e}")
                await self.cache.evict(CacheConfig.USERS, str(user_id))
            else:
                logger.debug(f"User with id: {user_id} served from cache")
                return result

        user = await self.user_repository.find_by_id(user_id)
        if user is None:
            logger.warning(f"User with id {user_id} not found")
            raise self._user_not_found(user_id)

        result = UserWithCards(user=user, cards=await self.card_repository.find_by_user_id(user_id))
        await self.cache.put(CacheConfig.USERS, str(user_id), result.model_dump(mode="json"))

        logger.info(f"User with id: {user_id} fetched successfully")
        return result

    async def get_user_by_email(self, email: str) -> Optional[UserWithCards]:
        """Look a user up by email. Absence is a normal outcome and returns None."""
        user = await self.user_repository.find_by_email(email)
        if user is None:
            logger.debug(f"User with email: {email} not found")
            return None

        cards = await self.card_repository.find_by_user_id(user.id)
        return UserWithCards(user=user, cards=cards)

    async def get_all_users(self, page: PageRequest) -> Page[User]:
        logger.debug(f"Fetching all users: page {page.page}, size {page.size}")
        result = await self.user_repository.find_all(page)
        logger.info(f"Fetched {len(result.content)} users")
        return result

    async def get_users_by_search_term(self, term: str, page: PageRequest) -> Page[User]:
        logger.debug(f"Searching users with term: '{term}', page {page.page}, size {page.size}")
        return await self.user_repository.find_by_search_term(term, page)

    async def get_users_with_birthday_today(self) -> List[User]:
        """
        Users whose birth month and day match today's, cached under a single shared key.

        The entry is cleared by every user create, update and delete.
        """
        cached = await self.cache.get(CacheConfig.USERS_WITH_BIRTHDAY_TODAY, CacheConfig.SHARED_KEY)
        if cached is not None:
            try:
                return [User.model_validate(item) for item in cached]
            except (pydantic.ValidationError, TypeError) as e:
                logger.warning(f"Discarding unreadable birthday cache entry: {e}")
                await self.cache.evict_all(CacheConfig.USERS_WITH_BIRTHDAY_TODAY)

        today = self.clock.today()
        users = await self.user_repository.find_users_with_birthday_today(today)
        await self.cache.put(
            CacheConfig.USERS_WITH_BIRTHDAY_TODAY,
            CacheConfig.SHARED_KEY,
            [user.model_dump(mode="json") for user in users]
        )

        logger.info(f"Fetched {len(users)} users with birthday on {today.isoformat()}")
        return users

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _validate_birth_date(self, details: UserDetails) -> None:
        if details.birth_date is not None and details.birth_date >= self.clock.today():
            raise ValidationError("Birth date must be in the past", field="birthDate")

    async def _evict_user(self, user_id: UUID) -> None:
        await self.cache.evict(CacheConfig.USERS, str(user_id))
        await self.cache.evict_all(CacheConfig.USERS_WITH_BIRTHDAY_TODAY)

    @staticmethod
    def _user_not_found(user_id: UUID) -> NotFoundError:
        return NotFoundError(
            f"User with id {user_id} not found.",
            resource_type="user",
            resource_id=str(user_id)
        )
