# 📄 File: marketplace/modules/user_management/application/dto/card_dto.py
# 🧭 Purpose (Layman Explanation):
# Defines how a payment card looks when it is sent back to a caller.
#
# 🧪 Purpose (Technical Summary):
# Card data transfer object with camelCase wire names (cardNumber, cardHolderName,
# expirationDate) and the mapping function from the CardInfo domain model.
#
# 🔗 Dependencies:
# - pydantic
# - marketplace.modules.user_management.domain.models.card (CardInfo)
#
# 🔄 Connected Modules / Calls From:
# - user_dto.py (embedded card lists), presentation/api/v1/cards.py and users.py

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from marketplace.modules.user_management.domain.models.card import CardInfo


class CardInfoDTO(BaseModel):
    """Payment card as returned by the API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID = Field(..., description="Unique identifier of the card")
    user_id: UUID = Field(..., description="Owning user")
    card_number: str = Field(..., description="Card number")
    card_holder_name: str = Field(..., description="Name printed on the card")
    expiration_date: date = Field(..., description="Expiration date")


def card_to_dto(card: CardInfo) -> CardInfoDTO:
    return CardInfoDTO(
        id=card.id,
        user_id=card.user_id,
        card_number=card.number,
        card_holder_name=card.holder,
        expiration_date=card.expiration_date,
    )
