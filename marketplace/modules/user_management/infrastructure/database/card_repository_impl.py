# 📄 File: marketplace/modules/user_management/infrastructure/database/card_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# This file does the actual database work for payment cards: storing them, finding them by id,
# number or owner, and listing the ones that have expired.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy async implementation of CardRepository with domain/model mapping and
# unique-constraint to ConflictError mapping on save.
#
# 🔗 Dependencies:
# - marketplace.modules.user_management.domain.repositories.card_repository (interface)
# - marketplace.modules.user_management.infrastructure.database.models (CardInfoModel)
# - SQLAlchemy async session and query operations
#
# 🔄 Connected Modules / Calls From:
# - presentation/dependencies.py (repository provider)
# - CardService, UserService (through the interface)

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.modules.user_management.domain.models.card import CardInfo
from marketplace.modules.user_management.domain.repositories.card_repository import CardRepository
from marketplace.modules.user_management.infrastructure.database.models import CardInfoModel
from marketplace.shared.core.exceptions import ConflictError, RepositoryError

logger = logging.getLogger(__name__)


class SQLAlchemyCardRepository(CardRepository):
    """
    SQLAlchemy implementation of the CardRepository interface.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def find_by_id(self, card_id: UUID) -> Optional[CardInfo]:
        model = await self._session.get(CardInfoModel, card_id)
        return self._model_to_domain(model) if model else None

    async def find_by_number(self, number: str) -> Optional[CardInfo]:
        result = await self._session.execute(
            select(CardInfoModel).where(CardInfoModel.number == number)
        )
        model = result.scalar_one_or_none()
        return self._model_to_domain(model) if model else None

    async def exists_by_id(self, card_id: UUID) -> bool:
        result = await self._session.execute(
            select(CardInfoModel.id).where(CardInfoModel.id == card_id)
        )
        return result.first() is not None

    async def save(self, card: CardInfo) -> CardInfo:
        """
        Insert a card. Cards are immutable, so an existing id is left as stored.

        Raises:
            ConflictError: If the number is already stored or the owner no longer exists
            RepositoryError: For other database errors
        """
        try:
            model = await self._session.get(CardInfoModel, card.id)
            if model is None:
                model = self._domain_to_model(card)
                self._session.add(model)
                await self._session.flush()

        except IntegrityError as e:
            await self._session.rollback()
            logger.warning(f"Card save failed for user {card.user_id}: constraint violated")
            raise ConflictError(
                f"Card with number {card.number} already exists.",
                resource_type="card",
                conflict_field="cardNumber"
            ) from e

        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Database error during card save: {e}")
            raise RepositoryError("Failed to save card", operation="save", entity="card") from e

        return self._model_to_domain(model)

    async def delete_by_id(self, card_id: UUID) -> None:
        try:
            await self._session.execute(delete(CardInfoModel).where(CardInfoModel.id == card_id))
            await self._session.flush()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Database error during card deletion: {e}")
            raise RepositoryError("Failed to delete card", operation="delete", entity="card") from e

    async def find_by_user_id(self, user_id: UUID) -> List[CardInfo]:
        result = await self._session.execute(
            select(CardInfoModel)
            .where(CardInfoModel.user_id == user_id)
            .order_by(CardInfoModel.expiration_date, CardInfoModel.id)
        )
        return [self._model_to_domain(model) for model in result.scalars().all()]

    async def find_expired_cards(self, as_of: date) -> List[CardInfo]:
        result = await self._session.execute(
            select(CardInfoModel)
            .where(CardInfoModel.expiration_date < as_of)
            .order_by(CardInfoModel.expiration_date, CardInfoModel.id)
        )
        return [self._model_to_domain(model) for model in result.scalars().all()]

    def _domain_to_model(self, card: CardInfo) -> CardInfoModel:
        return CardInfoModel(
            id=card.id,
            user_id=card.user_id,
            number=card.number,
            holder=card.holder,
            expiration_date=card.expiration_date,
        )

    def _model_to_domain(self, card_model: CardInfoModel) -> CardInfo:
        return CardInfo(
            id=card_model.id,
            user_id=card_model.user_id,
            number=card_model.number,
            holder=card_model.holder,
            expiration_date=card_model.expiration_date,
        )
