# 📄 File: marketplace/modules/user_management/presentation/api/v1/cards.py
# 🧭 Purpose (Layman Explanation):
# The web addresses for single payment cards: looking a card up, removing it, and the admin-only
# lookups by card number and the list of cards that have already expired.
#
# 🧪 Purpose (Technical Summary):
# FastAPI card endpoints. Card-by-id operations resolve ownership through AccessGuard.check_card
# (owner or admin); a non-admin asking for a missing card gets 403, never 404.
#
# 🔗 Dependencies:
# - FastAPI router, Query, status codes
# - marketplace.modules.user_management.presentation.dependencies (card service, guard)
# - marketplace.modules.user_management.application.dto.card_dto
#
# 🔄 Connected Modules / Calls From:
# - marketplace.api.v1.router (mounted under /api/v1)

import logging
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from marketplace.shared.core.dependencies import get_optional_principal
from marketplace.shared.core.exceptions import NotFoundError, ValidationError
from marketplace.shared.core.security import Principal

from marketplace.modules.user_management.application.access_guard import AccessGuard
from marketplace.modules.user_management.application.dto.card_dto import CardInfoDTO, card_to_dto
from marketplace.modules.user_management.domain.services.access_policy import Operation
from marketplace.modules.user_management.domain.services.card_service import CardService
from marketplace.modules.user_management.presentation.dependencies import (
    get_access_guard,
    get_card_service,
)

logger = logging.getLogger(__name__)

cards_router = APIRouter(prefix="/cards", tags=["Cards"])

EXPIRATION_TODAY = "today"


@cards_router.get(
    "",
    response_model=Union[CardInfoDTO, List[CardInfoDTO]],
    summary="Look up card by number or list expired cards",
    description=(
        "With ?number= returns the card with that number or 404. "
        "With ?expiration-date=today returns every card that expired before today."
    ),
    responses={
        200: {"description": "Card or list of expired cards"},
        400: {"description": "Missing or unsupported query parameter"},
        403: {"description": "Administrator role required"},
        404: {"description": "No card with the given number"},
    }
)
async def query_cards(
    number: Optional[str] = Query(None, description="Exact card number"),
    expiration_date: Optional[str] = Query(
        None,
        alias="expiration-date",
        description="Only 'today' is supported"
    ),
    principal: Optional[Principal] = Depends(get_optional_principal),
    guard: AccessGuard = Depends(get_access_guard),
    card_service: CardService = Depends(get_card_service),
) -> Union[CardInfoDTO, List[CardInfoDTO]]:
    if number is not None:
        guard.check(Operation.GET_CARD_BY_NUMBER, principal)
        card = await card_service.get_card_by_number(number)
        if card is None:
            raise NotFoundError(
                f"Card with number {number} not found.",
                resource_type="card"
            )
        return card_to_dto(card)

    guard.check(Operation.LIST_EXPIRED_CARDS, principal)

    if expiration_date is None:
        raise ValidationError(
            "Either number or expiration-date must be given",
            field="expiration-date"
        )
    if expiration_date.strip().lower() != EXPIRATION_TODAY:
        raise ValidationError(
            f"Unsupported expiration-date value: {expiration_date}",
            field="expiration-date"
        )

    cards = await card_service.get_expired_cards()
    return [card_to_dto(card) for card in cards]


@cards_router.get(
    "/{card_id}",
    response_model=CardInfoDTO,
    summary="Get card",
    responses={
        200: {"description": "Card"},
        403: {"description": "Caller neither owns the card nor is an administrator"},
        404: {"description": "Card not found"},
    }
)
async def get_card(
    card_id: UUID,
    principal: Optional[Principal] = Depends(get_optional_principal),
    guard: AccessGuard = Depends(get_access_guard),
    card_service: CardService = Depends(get_card_service),
) -> CardInfoDTO:
    await guard.check_card(Operation.GET_CARD, principal, card_id)
    card = await card_service.get_card_by_id(card_id)
    return card_to_dto(card)


@cards_router.delete(
    "/{card_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete card",
    responses={
        204: {"description": "Card deleted"},
        403: {"description": "Caller neither owns the card nor is an administrator"},
        404: {"description": "Card not found"},
    }
)
async def delete_card(
    card_id: UUID,
    principal: Optional[Principal] = Depends(get_optional_principal),
    guard: AccessGuard = Depends(get_access_guard),
    card_service: CardService = Depends(get_card_service),
) -> Response:
    await guard.check_card(Operation.DELETE_CARD, principal, card_id)
    await card_service.delete_card(card_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
