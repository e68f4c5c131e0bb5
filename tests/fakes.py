"""
In-memory stand-ins for the repository ports and the cache backend.

Each fake counts calls so tests can assert how often persistence or the
cache was touched.
"""

from collections import Counter
from datetime import date
from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from marketplace.shared.infrastructure.cache.base import CacheBackend
from marketplace.modules.user_management.domain.models.card import CardDetails, CardInfo
from marketplace.modules.user_management.domain.models.page import Page, PageRequest
from marketplace.modules.user_management.domain.models.user import User, UserDetails
from marketplace.modules.user_management.domain.repositories.card_repository import CardRepository
from marketplace.modules.user_management.domain.repositories.user_repository import UserRepository

TODAY = date(2025, 10, 30)


class InMemoryCardRepository(CardRepository):
    def __init__(self):
        self.cards: Dict[UUID, CardInfo] = {}
        self.calls: Counter = Counter()

    async def find_by_id(self, card_id: UUID) -> Optional[CardInfo]:
        self.calls["find_by_id"] += 1
        return self.cards.get(card_id)

    async def find_by_number(self, number: str) -> Optional[CardInfo]:
        self.calls["find_by_number"] += 1
        return next((c for c in self.cards.values() if c.number == number), None)

    async def exists_by_id(self, card_id: UUID) -> bool:
        self.calls["exists_by_id"] += 1
        return card_id in self.cards

    async def save(self, card: CardInfo) -> CardInfo:
        self.calls["save"] += 1
        self.cards[card.id] = card
        return card

    async def delete_by_id(self, card_id: UUID) -> None:
        self.calls["delete_by_id"] += 1
        self.cards.pop(card_id, None)

    async def find_by_user_id(self, user_id: UUID) -> List[CardInfo]:
        self.calls["find_by_user_id"] += 1
        return [c for c in self.cards.values() if c.user_id == user_id]

    async def find_expired_cards(self, as_of: date) -> List[CardInfo]:
        self.calls["find_expired_cards"] += 1
        return sorted(
            (c for c in self.cards.values() if c.expiration_date < as_of),
            key=lambda c: c.expiration_date
        )

    @property
    def writes(self) -> int:
        return self.calls["save"] + self.calls["delete_by_id"]


class InMemoryUserRepository(UserRepository):
    def __init__(self, card_repository: Optional[InMemoryCardRepository] = None):
        self.users: Dict[UUID, User] = {}
        self.card_repository = card_repository
        self.calls: Counter = Counter()

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        self.calls["find_by_id"] += 1
        user = self.users.get(user_id)
        return user.model_copy() if user is not None else None

    async def find_by_email(self, email: str) -> Optional[User]:
        self.calls["find_by_email"] += 1
        user = next((u for u in self.users.values() if u.email == email.strip()), None)
        return user.model_copy() if user is not None else None

    async def exists_by_id(self, user_id: UUID) -> bool:
        self.calls["exists_by_id"] += 1
        return user_id in self.users

    async def save(self, user: User) -> User:
        self.calls["save"] += 1
        self.users[user.id] = user.model_copy()
        return user

    async def delete_by_id(self, user_id: UUID) -> None:
        self.calls["delete_by_id"] += 1
        self.users.pop(user_id, None)
        if self.card_repository is not None:
            for card_id in [c.id for c in self.card_repository.cards.values() if c.user_id == user_id]:
                del self.card_repository.cards[card_id]

    async def find_all(self, page: PageRequest) -> Page[User]:
        self.calls["find_all"] += 1
        return self._page(list(self.users.values()), page)

    async def find_by_search_term(self, term: str, page: PageRequest) -> Page[User]:
        self.calls["find_by_search_term"] += 1
        needle = term.strip().lower()
        matches = [
            u for u in self.users.values()
            if needle in u.name.lower()
            or needle in (u.surname or "").lower()
            or needle in u.email.lower()
        ]
        return self._page(matches, page)

    async def find_users_with_birthday_today(self, today: date) -> List[User]:
        self.calls["find_users_with_birthday_today"] += 1
        return [u for u in self.users.values() if u.has_birthday_on(today)]

    @property
    def writes(self) -> int:
        return self.calls["save"] + self.calls["delete_by_id"]

    @staticmethod
    def _page(users: List[User], page: PageRequest) -> Page[User]:
        ordered = sorted(users, key=lambda u: (u.name, str(u.id)))
        content = ordered[page.offset:page.offset + page.size]
        return Page.of(content, len(ordered), page)


class InMemoryCache(CacheBackend):
    """Dict backed cache recording every operation."""

    def __init__(self):
        self.entries: Dict[Tuple[str, str], Any] = {}
        self.calls: Counter = Counter()
        self.evicted: List[Tuple[str, Optional[str]]] = []

    async def get(self, cache_name: str, key: Any) -> Optional[Any]:
        self.calls["get"] += 1
        return self.entries.get((cache_name, str(key)))

    async def put(self, cache_name: str, key: Any, value: Any) -> None:
        self.calls["put"] += 1
        self.entries[(cache_name, str(key))] = value

    async def evict(self, cache_name: str, key: Any) -> None:
        self.calls["evict"] += 1
        self.evicted.append((cache_name, str(key)))
        self.entries.pop((cache_name, str(key)), None)

    async def evict_all(self, cache_name: str) -> None:
        self.calls["evict_all"] += 1
        self.evicted.append((cache_name, None))
        for entry in [k for k in self.entries if k[0] == cache_name]:
            del self.entries[entry]

    def has(self, cache_name: str, key: Any) -> bool:
        return (cache_name, str(key)) in self.entries


def user_details(email="a@x.com", name="Ada", surname="Lovelace", birth_date=date(1990, 12, 10)) -> UserDetails:
    return UserDetails(name=name, surname=surname, birth_date=birth_date, email=email)


def card_details(number="1111", holder="ADA LOVELACE", expiration_date=date(2030, 1, 31)) -> CardDetails:
    return CardDetails(number=number, holder=holder, expiration_date=expiration_date)
