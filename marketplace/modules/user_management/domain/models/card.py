# 📄 File: marketplace/modules/user_management/domain/models/card.py
# 🧭 Purpose (Layman Explanation):
# Defines a payment card stored in the directory: whose it is, its number,
# the name printed on it and when it expires.
# 🧪 Purpose (Technical Summary):
# Pydantic domain model for the CardInfo entity. Ownership is fixed at creation;
# cards are never updated, only created and deleted.
# 🔗 Dependencies:
# pydantic, datetime, uuid
# 🔄 Connected Modules / Calls From:
# card_service.py, card_repository.py, card_dto.py, user_service.py (user with cards)

from datetime import date
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

CARD_NUMBER_MAX_LENGTH = 64
CARD_HOLDER_MAX_LENGTH = 255


class CardInfo(BaseModel):
    """Payment card owned by exactly one user."""

    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    user_id: UUID
    number: str = Field(min_length=1, max_length=CARD_NUMBER_MAX_LENGTH)
    holder: str = Field(min_length=1, max_length=CARD_HOLDER_MAX_LENGTH)
    expiration_date: date

    def is_owned_by(self, user_id: UUID) -> bool:
        return self.user_id == user_id

    def is_expired(self, as_of: date) -> bool:
        """Expired means the expiration date is strictly before ``as_of``."""
        return self.expiration_date < as_of


class CardDetails(BaseModel):
    """Card fields as submitted when a card is added to a user."""

    number: str = Field(min_length=1, max_length=CARD_NUMBER_MAX_LENGTH)
    holder: str = Field(min_length=1, max_length=CARD_HOLDER_MAX_LENGTH)
    expiration_date: date

    def to_card(self, user_id: UUID) -> CardInfo:
        return CardInfo(user_id=user_id, number=self.number, holder=self.holder, expiration_date=self.expiration_date)
