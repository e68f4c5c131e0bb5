# 📄 File: marketplace/modules/user_management/application/dto/user_dto.py
# 🧭 Purpose (Layman Explanation):
# This file defines the shape of user information as it leaves the service, so callers always
# see the same fields (id, name, surname, birthDate, email, and cards where relevant).
#
# 🧪 Purpose (Technical Summary):
# User data transfer objects with camelCase wire names and hand-written mapping
# functions from the domain models (User, UserWithCards, Page[User]).
#
# 🔗 Dependencies:
# - pydantic for DTO validation and serialization
# - marketplace.modules.user_management.domain.models (User, UserWithCards, Page)
#
# 🔄 Connected Modules / Calls From:
# - marketplace.modules.user_management.presentation.api.v1 (response models)

"""
User Data Transfer Objects (DTOs)

DTO Classes:
- UserDTO: user fields
- UserWithCardsDTO: user fields plus the user's cards
- UserPageDTO: one page of users with paging metadata
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from marketplace.modules.user_management.domain.models.page import Page
from marketplace.modules.user_management.domain.models.user import User
from marketplace.modules.user_management.domain.models.user_with_cards import UserWithCards

from .card_dto import CardInfoDTO, card_to_dto


class UserDTO(BaseModel):
    """User data as returned by the API."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: UUID = Field(..., description="Unique identifier of the user")
    name: str = Field(..., description="Given name")
    surname: Optional[str] = Field(default=None, description="Family name")
    birth_date: Optional[date] = Field(default=None, description="Date of birth")
    email: str = Field(..., description="Email address")


class UserWithCardsDTO(UserDTO):
    """User data with the user's payment cards."""

    cards: List[CardInfoDTO] = Field(default_factory=list, description="Cards owned by the user")


class UserPageDTO(BaseModel):
    """Paginated user list."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    content: List[UserDTO]
    total_elements: int = Field(..., description="Total number of matching users")
    total_pages: int
    page: int = Field(..., description="Zero-based page number")
    size: int
    has_next: bool
    has_previous: bool


# =============================================================================
# MAPPERS
# =============================================================================

def user_to_dto(user: User) -> UserDTO:
    return UserDTO(
        id=user.id,
        name=user.name,
        surname=user.surname,
        birth_date=user.birth_date,
        email=user.email,
    )


def user_with_cards_to_dto(result: UserWithCards) -> UserWithCardsDTO:
    user = result.user
    return UserWithCardsDTO(
        id=user.id,
        name=user.name,
        surname=user.surname,
        birth_date=user.birth_date,
        email=user.email,
        cards=[card_to_dto(card) for card in result.cards],
    )


def user_page_to_dto(page: Page[User]) -> UserPageDTO:
    return UserPageDTO(
        content=[user_to_dto(user) for user in page.content],
        total_elements=page.total,
        total_pages=page.total_pages,
        page=page.page,
        size=page.size,
        has_next=page.has_next,
        has_previous=page.has_previous,
    )
