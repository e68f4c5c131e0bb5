# 📄 File: marketplace/modules/user_management/domain/repositories/card_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for storing and finding payment cards without saying which database is used
# 🧪 Purpose (Technical Summary):
# Repository interface for CardInfo entities: exact lookups, owner filter and expiration query
# 🔗 Dependencies:
# Domain model (CardInfo), typing, abc
# 🔄 Connected Modules / Calls From:
# CardService, UserService (user with cards), SQLAlchemy implementation, test fakes

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from uuid import UUID

from ..models.card import CardInfo


class CardRepository(ABC):
    """
    Repository interface for CardInfo entity data access operations.

    The storage layer enforces card number uniqueness and reports a
    violation as ConflictError.
    """

    @abstractmethod
    async def find_by_id(self, card_id: UUID) -> Optional[CardInfo]:
        """Get card by ID, or None."""
        pass

    @abstractmethod
    async def find_by_number(self, number: str) -> Optional[CardInfo]:
        """Get card by exact card number, or None."""
        pass

    @abstractmethod
    async def exists_by_id(self, card_id: UUID) -> bool:
        pass

    @abstractmethod
    async def save(self, card: CardInfo) -> CardInfo:
        """
        Persist a card.

        Raises:
            ConflictError: If the card number is already stored
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def delete_by_id(self, card_id: UUID) -> None:
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: UUID) -> List[CardInfo]:
        """All cards owned by a user. Unknown users simply have no cards."""
        pass

    @abstractmethod
    async def find_expired_cards(self, as_of: date) -> List[CardInfo]:
        """Cards whose expiration date is strictly before ``as_of``."""
        pass
