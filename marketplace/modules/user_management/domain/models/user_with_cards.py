# 📄 File: marketplace/modules/user_management/domain/models/user_with_cards.py
# 🧭 Purpose (Layman Explanation):
# A user together with every payment card they own, which is what "show me this user" returns.
# 🧪 Purpose (Technical Summary):
# Read-side aggregate of a User and its CardInfo list. It is the value cached in the
# "users" cache, so it must stay JSON serializable.
# 🔗 Dependencies:
# pydantic, user.py, card.py
# 🔄 Connected Modules / Calls From:
# user_service.py (get_user_by_id), user_dto.py

from typing import List

from pydantic import BaseModel, Field

from .card import CardInfo
from .user import User


class UserWithCards(BaseModel):
    user: User
    cards: List[CardInfo] = Field(default_factory=list)
