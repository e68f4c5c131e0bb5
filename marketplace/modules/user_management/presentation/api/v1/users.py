# 📄 File: marketplace/modules/user_management/presentation/api/v1/users.py
# 🧭 Purpose (Layman Explanation):
# The web addresses for working with users: signing a user up, viewing and changing a profile,
# removing an account, the admin-only lists and searches, and adding or listing a user's cards.
#
# 🧪 Purpose (Technical Summary):
# FastAPI user endpoints. Each handler runs the AccessGuard for its operation before calling
# UserService or CardService, then maps the domain result to its DTO. Domain exceptions are
# left to the application exception handlers.
#
# 🔗 Dependencies:
# - FastAPI router, Query, status codes
# - marketplace.modules.user_management.presentation.dependencies (services, guard, paging)
# - marketplace.modules.user_management.application.dto (response models)
# - marketplace.modules.user_management.presentation.api.schemas (request bodies)
#
# 🔄 Connected Modules / Calls From:
# - marketplace.api.v1.router (mounted under /api/v1)

"""
Users API Endpoints

Endpoints:
- POST /users: Create a user (public)
- GET /users: List users, search by term, or look up by ?email= (admin only)
- GET /users/birthdays: Users whose birthday is today (admin only)
- GET /users/{user_id}: Get a user with cards (self)
- PUT /users/{user_id}: Replace a user's fields (self)
- DELETE /users/{user_id}: Delete a user and their cards (self)
- POST /users/{user_id}/cards: Add a card to a user (self)
- GET /users/{user_id}/cards: List a user's cards (self)
"""

import logging
from typing import List, Optional, Union
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from marketplace.shared.core.dependencies import get_optional_principal
from marketplace.shared.core.exceptions import NotFoundError
from marketplace.shared.core.security import Principal

from marketplace.modules.user_management.application.access_guard import AccessGuard
from marketplace.modules.user_management.application.dto.card_dto import CardInfoDTO, card_to_dto
from marketplace.modules.user_management.application.dto.user_dto import (
    UserDTO,
    UserPageDTO,
    UserWithCardsDTO,
    user_page_to_dto,
    user_to_dto,
    user_with_cards_to_dto,
)
from marketplace.modules.user_management.domain.models.page import PageRequest
from marketplace.modules.user_management.domain.services.access_policy import Operation
from marketplace.modules.user_management.domain.services.card_service import CardService
from marketplace.modules.user_management.domain.services.user_service import UserService
from marketplace.modules.user_management.presentation.api.schemas.card_schemas import CardRequest
from marketplace.modules.user_management.presentation.api.schemas.user_schemas import UserRequest
from marketplace.modules.user_management.presentation.dependencies import (
    get_access_guard,
    get_card_service,
    get_page_request,
    get_user_service,
)

logger = logging.getLogger(__name__)

users_router = APIRouter(prefix="/users", tags=["Users"])


@users_router.post(
    "",
    response_model=UserDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Create user",
    responses={
        201: {"description": "User created"},
        400: {"description": "Invalid user data"},
        409: {"description": "Email already in use"},
    }
)
async def create_user(
    request: UserRequest,
    principal: Optional[Principal] = Depends(get_optional_principal),
    guard: AccessGuard = Depends(get_access_guard),
    user_service: UserService = Depends(get_user_service),
) -> UserDTO:
    guard.check(Operation.CREATE_USER, principal)
    user = await user_service.create_user(request.to_details())
    return user_to_dto(user)


@users_router.get(
    "",
    response_model=Union[UserWithCardsDTO, UserPageDTO],
    summary="List, search or look up users",
    description=(
        "With ?email= returns the matching user with cards or 404. "
        "With ?search= returns a page of users whose name, surname or email contains the term. "
        "Without either returns a page of all users."
    ),
    responses={
        200: {"description": "User or page of users"},
        403: {"description": "Administrator role required"},
        404: {"description": "No user with the given email"},
    }
)
async def list_users(
    email: Optional[str] = Query(None, description="Exact email to look up"),
    search: Optional[str] = Query(None, description="Case-insensitive substring"),
    page_request: PageRequest = Depends(get_page_request),
    principal: Optional[Principal] = Depends(get_optional_principal),
    guard: AccessGuard = Depends(get_access_guard),
    user_service: UserService = Depends(get_user_service),
) -> Union[UserWithCardsDTO, UserPageDTO]:
    if email is not None:
        guard.check(Operation.GET_USER_BY_EMAIL, principal)
        result = await user_service.get_user_by_email(email)
        if result is None:
            raise NotFoundError(
                f"User with email {email} not found.",
                resource_type="user",
                resource_id=email
            )
        return user_with_cards_to_dto(result)

    if search is not None:
        guard.check(Operation.SEARCH_USERS, principal)
        page = await user_service.get_users_by_search_term(search, page_request)
        return user_page_to_dto(page)

    guard.check(Operation.LIST_USERS, principal)
    page = await user_service.get_all_users(page_request)
    return user_page_to_dto(page)


# Declared before /{user_id} so "birthdays" is not parsed as an id.
@users_router.get(
    "/birthdays",
    response_model=List[UserDTO],
    summary="Users with birthday today",
    responses={
        200: {"description": "Users whose birth month and day are today (possibly empty)"},
        403: {"description": "Administrator role required"},
    }
)
async def list_birthdays(
    principal: Optional[Principal] = Depends(get_optional_principal),
    guard: AccessGuard = Depends(get_access_guard),
    user_service: UserService = Depends(get_user_service),
) -> List[UserDTO]:
    guard.check(Operation.LIST_BIRTHDAYS, principal)
    users = await user_service.get_users_with_birthday_today()
    return [user_to_dto(user) for user in users]


@users_router.get(
    "/{user_id}",
    response_model=UserWithCardsDTO,
    summary="Get user with cards",
    responses={
        200: {"description": "User with cards"},
        403: {"description": "Not the caller's own account"},
        404: {"description": "User not found"},
    }
)
async def get_user(
    user_id: UUID,
    principal: Optional[Principal] = Depends(get_optional_principal),
    guard: AccessGuard = Depends(get_access_guard),
    user_service: UserService = Depends(get_user_service),
) -> UserWithCardsDTO:
    guard.check(Operation.GET_USER, principal, owner_id=user_id)
    result = await user_service.get_user_by_id(user_id)
    return user_with_cards_to_dto(result)


@users_router.put(
    "/{user_id}",
    response_model=UserDTO,
    summary="Update user",
    description="Replaces every mutable field of the user.",
    responses={
        200: {"description": "User updated"},
        403: {"description": "Not the caller's own account"},
        404: {"description": "User not found"},
        409: {"description": "Email already in use"},
    }
)
async def update_user(
    user_id: UUID,
    request: UserRequest,
    principal: Optional[Principal] = Depends(get_optional_principal),
    guard: AccessGuard = Depends(get_access_guard),
    user_service: UserService = Depends(get_user_service),
) -> UserDTO:
    guard.check(Operation.UPDATE_USER, principal, owner_id=user_id)
    user = await user_service.update_user(user_id, request.to_details())
    return user_to_dto(user)


@users_router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete user",
    responses={
        204: {"description": "User and their cards deleted"},
        403: {"description": "Not the caller's own account"},
        404: {"description": "User not found"},
    }
)
async def delete_user(
    user_id: UUID,
    principal: Optional[Principal] = Depends(get_optional_principal),
    guard: AccessGuard = Depends(get_access_guard),
    user_service: UserService = Depends(get_user_service),
) -> Response:
    guard.check(Operation.DELETE_USER, principal, owner_id=user_id)
    await user_service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# =========================================================================
# USER CARDS
# =========================================================================

@users_router.post(
    "/{user_id}/cards",
    response_model=CardInfoDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Add card to user",
    responses={
        201: {"description": "Card created (or the caller's existing card with that number)"},
        400: {"description": "Invalid card data"},
        403: {"description": "Not the caller's own account"},
        404: {"description": "User not found"},
        409: {"description": "Card number belongs to another user"},
    }
)
async def create_card(
    user_id: UUID,
    request: CardRequest,
    principal: Optional[Principal] = Depends(get_optional_principal),
    guard: AccessGuard = Depends(get_access_guard),
    card_service: CardService = Depends(get_card_service),
) -> CardInfoDTO:
    guard.check(Operation.CREATE_CARD, principal, owner_id=user_id)
    card = await card_service.create_card_for_user(user_id, request.to_details())
    return card_to_dto(card)


@users_router.get(
    "/{user_id}/cards",
    response_model=List[CardInfoDTO],
    summary="List user's cards",
    responses={
        200: {"description": "Cards of the user (possibly empty)"},
        403: {"description": "Not the caller's own account"},
    }
)
async def list_user_cards(
    user_id: UUID,
    principal: Optional[Principal] = Depends(get_optional_principal),
    guard: AccessGuard = Depends(get_access_guard),
    card_service: CardService = Depends(get_card_service),
) -> List[CardInfoDTO]:
    guard.check(Operation.LIST_USER_CARDS, principal, owner_id=user_id)
    cards = await card_service.get_cards_by_user_id(user_id)
    return [card_to_dto(card) for card in cards]
