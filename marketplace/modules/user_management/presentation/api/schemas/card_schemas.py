# 📄 File: marketplace/modules/user_management/presentation/api/schemas/card_schemas.py
# 🧭 Purpose (Layman Explanation):
# Checks the card details sent to the API: a number, a holder name and an expiration date.
# 🧪 Purpose (Technical Summary):
# Pydantic request schema for card creation (cardNumber <= 64, cardHolderName <= 255,
# expirationDate required) and its conversion to the domain CardDetails value.
# 🔗 Dependencies:
# pydantic, domain CardDetails
# 🔄 Connected Modules / Calls From:
# presentation/api/v1/users.py (POST /users/{user_id}/cards)

from datetime import date

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from marketplace.modules.user_management.domain.models.card import (
    CARD_HOLDER_MAX_LENGTH,
    CARD_NUMBER_MAX_LENGTH,
    CardDetails,
)


class CardRequest(BaseModel):
    """New card request."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "cardNumber": "4111111111111111",
                "cardHolderName": "ADA LOVELACE",
                "expirationDate": "2030-01-31"
            }
        },
    )

    card_number: str = Field(..., min_length=1, max_length=CARD_NUMBER_MAX_LENGTH)
    card_holder_name: str = Field(..., min_length=1, max_length=CARD_HOLDER_MAX_LENGTH)
    expiration_date: date

    def to_details(self) -> CardDetails:
        return CardDetails(
            number=self.card_number,
            holder=self.card_holder_name,
            expiration_date=self.expiration_date,
        )
