"""
Shared fixtures.

Environment variables are set before any marketplace import because settings
are read once per process.
"""

import os

os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTH_SERVICE_URL", "http://auth.test")
os.environ.setdefault("LOG_FORMAT", "text")

import pytest

from marketplace.shared.core.clock import FixedClock
from marketplace.modules.user_management.domain.services.card_service import CardService
from marketplace.modules.user_management.domain.services.user_service import UserService

from tests.fakes import TODAY, InMemoryCache, InMemoryCardRepository, InMemoryUserRepository


@pytest.fixture
def clock():
    return FixedClock.on(TODAY)


@pytest.fixture
def cache():
    return InMemoryCache()


@pytest.fixture
def card_repository():
    return InMemoryCardRepository()


@pytest.fixture
def user_repository(card_repository):
    return InMemoryUserRepository(card_repository)


@pytest.fixture
def user_service(user_repository, card_repository, cache, clock):
    return UserService(user_repository, card_repository, cache, clock)


@pytest.fixture
def card_service(card_repository, user_repository, cache, clock):
    return CardService(card_repository, user_repository, cache, clock, require_future_expiration=True)
