# 📄 File: marketplace/modules/user_management/domain/services/card_service.py
# 🧭 Purpose (Layman Explanation):
# Business rules for payment cards: a card can only be added to an existing user,
# one card number can never belong to two people, and lists of expired cards are remembered.
# 🧪 Purpose (Technical Summary):
# Domain service for the card lifecycle with owner-aware uniqueness (idempotent
# re-submission by the same owner), a configurable future-expiration rule, eviction of
# the owner's cached user entry and a cached expired-card query driven by the clock.
# 🔗 Dependencies:
# CardInfo domain models, CardRepository, UserRepository, CacheBackend, Clock, shared exceptions
# 🔄 Connected Modules / Calls From:
# Presentation routers (cards.py, users.py)

import logging
from typing import List, Optional
from uuid import UUID

import pydantic

from marketplace.shared.config.redis import CacheConfig
from marketplace.shared.core.clock import Clock
from marketplace.shared.core.exceptions import ConflictError, NotFoundError, ValidationError
from marketplace.shared.infrastructure.cache.base import CacheBackend

from ..models.card import CardDetails, CardInfo
from ..repositories.card_repository import CardRepository
from ..repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


class CardService:
    """
    Domain service for card management business logic.

    The expired-card entry is not refreshed when the date rolls over; it only
    changes when a card is deleted or an already expired card is added.
    """

    def __init__(
        self,
        card_repository: CardRepository,
        user_repository: UserRepository,
        cache: CacheBackend,
        clock: Clock,
        require_future_expiration: bool = True,
    ):
        self.card_repository = card_repository
        self.user_repository = user_repository
        self.cache = cache
        self.clock = clock
        self.require_future_expiration = require_future_expiration

    async def create_card_for_user(self, user_id: UUID, details: CardDetails) -> CardInfo:
        """
        Add a card to an existing user.

        Re-submitting a number the same user already owns returns the stored card.

        Raises:
            ValidationError: If future expiration is required and the date is not after today
            NotFoundError: If the user does not exist
            ConflictError: If the number belongs to a different user
        """
        logger.debug(f"Attempting to create card for user with id: {user_id}")

        today = self.clock.today()
        if self.require_future_expiration and details.expiration_date <= today:
            raise ValidationError(
                "Expiration date must be in the future",
                field="expirationDate"
            )

        if not await self.user_repository.exists_by_id(user_id):
            logger.warning(f"Card creation failed: user with id {user_id} not found")
            raise NotFoundError(
                f"User with id {user_id} not found.",
                resource_type="user",
                resource_id=str(user_id)
            )

        existing = await self.card_repository.find_by_number(details.number)
        if existing is not None:
            if existing.is_owned_by(user_id):
                logger.info(f"Card with id: {existing.id} already registered for user with id: {user_id}")
                return existing
            logger.warning("Card creation failed: card number already registered to another user")
            raise ConflictError(
                f"Card with number {details.number} already exists.",
                resource_type="card",
                conflict_field="cardNumber"
            )

        card = await self.card_repository.save(details.to_card(user_id))
        await self.cache.evict(CacheConfig.USERS, str(user_id))
        if card.is_expired(today):
            await self.cache.evict_all(CacheConfig.EXPIRED_CARDS)

        logger.info(f"Card with id: {card.id} created successfully for user with id: {user_id}")
        return card

    async def delete_card(self, card_id: UUID) -> None:
        """
        Delete a card and drop the owner's cached user entry.

        Raises:
            NotFoundError: If the card does not exist
        """
        logger.debug(f"Attempting to delete card with id: {card_id}")

        card = await self.card_repository.find_by_id(card_id)
        if card is None:
            logger.warning(f"Card deletion failed: card with id {card_id} not found")
            raise self._card_not_found(card_id)

        await self.card_repository.delete_by_id(card_id)
        await self.cache.evict(CacheConfig.USERS, str(card.user_id))
        await self.cache.evict_all(CacheConfig.EXPIRED_CARDS)

        logger.info(f"Card with id: {card_id} deleted successfully")

    async def get_card_by_id(self, card_id: UUID) -> CardInfo:
        card = await self.card_repository.find_by_id(card_id)
        if card is None:
            logger.warning(f"Card with id {card_id} not found")
            raise self._card_not_found(card_id)
        return card

    async def get_card_by_number(self, number: str) -> Optional[CardInfo]:
        return await self.card_repository.find_by_number(number)

    async def get_cards_by_user_id(self, user_id: UUID) -> List[CardInfo]:
        """Cards of a user. Unknown users yield an empty list, not an error."""
        return await self.card_repository.find_by_user_id(user_id)

    async def get_expired_cards(self) -> List[CardInfo]:
        """Cards expiring strictly before today, cached under a single shared key."""
        cached = await self.cache.get(CacheConfig.EXPIRED_CARDS, CacheConfig.SHARED_KEY)
        if cached is not None:
            try:
                return [CardInfo.model_validate(item) for item in cached]
            except (pydantic.ValidationError, TypeError) as e:
                logger.warning(f"Discarding unreadable expired-card cache entry: {e}")
                await self.cache.evict_all(CacheConfig.EXPIRED_CARDS)

        today = self.clock.today()
        cards = await self.card_repository.find_expired_cards(today)
        await self.cache.put(
            CacheConfig.EXPIRED_CARDS,
            CacheConfig.SHARED_KEY,
            [card.model_dump(mode="json") for card in cards]
        )

        logger.info(f"Fetched {len(cards)} cards expired before {today.isoformat()}")
        return cards

    @staticmethod
    def _card_not_found(card_id: UUID) -> NotFoundError:
        return NotFoundError(
            f"Card with id {card_id} not found.",
            resource_type="card",
            resource_id=str(card_id)
        )
