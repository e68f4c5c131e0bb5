# 📄 File: marketplace/modules/user_management/domain/models/__init__.py
# 🧭 Purpose (Layman Explanation):
# Collects the descriptions of a user, a card and a page of results in one place.
# 🧪 Purpose (Technical Summary):
# Re-exports the domain models.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# Domain services, repositories, DTO mappers, tests

from .card import CardDetails, CardInfo
from .page import Page, PageRequest
from .user import User, UserDetails
from .user_with_cards import UserWithCards

__all__ = [
    "CardDetails",
    "CardInfo",
    "Page",
    "PageRequest",
    "User",
    "UserDetails",
    "UserWithCards",
]
