# 📄 File: marketplace/modules/user_management/presentation/dependencies.py
# 🧭 Purpose (Layman Explanation):
# Hands every user and card endpoint the tools it needs (database access, the cache, the clock,
# the login service and the permission checker) without each endpoint building them itself.
# 🧪 Purpose (Technical Summary):
# FastAPI dependency providers wiring repositories (per-request AsyncSession), the cache backend,
# the clock and the credential provider into UserService, CardService, RegistrationService and
# AccessGuard. Tests replace any of these through app.dependency_overrides.
# 🔗 Dependencies:
# FastAPI, SQLAlchemy AsyncSession, marketplace.shared.*, user_management domain/application/infrastructure
# 🔄 Connected Modules / Calls From:
# marketplace.modules.user_management.presentation.api.v1.* (users, cards, registration)

"""
User Management Module Dependencies

Providers:
- Repositories bound to the request's database session
- Cache backend (Redis, or a no-op backend when caching is disabled) and its
  per-request view that replays evictions after commit
- Clock (system UTC clock)
- Credential provider (auth service client)
- Services and the access guard built from the above
- Page request parsed from ?page=&size=
"""

import logging
from functools import lru_cache

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.shared.config.settings import get_settings
from marketplace.shared.core.clock import Clock, get_default_clock
from marketplace.shared.infrastructure.cache.base import CacheBackend, NoOpCacheBackend, TransactionalCache
from marketplace.shared.infrastructure.cache.redis_cache import RedisCacheBackend
from marketplace.shared.infrastructure.database.session import get_db_session, run_after_commit

from marketplace.modules.user_management.application.access_guard import AccessGuard
from marketplace.modules.user_management.domain.models.page import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    PageRequest,
)
from marketplace.modules.user_management.domain.repositories.card_repository import CardRepository
from marketplace.modules.user_management.domain.repositories.user_repository import UserRepository
from marketplace.modules.user_management.domain.services.card_service import CardService
from marketplace.modules.user_management.domain.services.registration_service import (
    CredentialProvider,
    RegistrationService,
)
from marketplace.modules.user_management.domain.services.user_service import UserService
from marketplace.modules.user_management.infrastructure.database.card_repository_impl import (
    SQLAlchemyCardRepository,
)
from marketplace.modules.user_management.infrastructure.database.user_repository_impl import (
    SQLAlchemyUserRepository,
)
from marketplace.modules.user_management.infrastructure.external.auth_service_client import (
    get_auth_service_client,
)

logger = logging.getLogger(__name__)


# =========================================================================
# INFRASTRUCTURE
# =========================================================================

def get_user_repository(session: AsyncSession = Depends(get_db_session)) -> UserRepository:
    return SQLAlchemyUserRepository(session)


def get_card_repository(session: AsyncSession = Depends(get_db_session)) -> CardRepository:
    return SQLAlchemyCardRepository(session)


@lru_cache()
def get_cache() -> CacheBackend:
    """Process wide cache backend chosen from CACHE_ENABLED."""
    if not get_settings().CACHE_ENABLED:
        logger.info("Caching disabled; using no-op cache backend")
        return NoOpCacheBackend()
    return RedisCacheBackend()


def get_request_cache(
    session: AsyncSession = Depends(get_db_session),
    cache: CacheBackend = Depends(get_cache),
) -> CacheBackend:
    """Cache view for one request; its evictions run again after the session commits."""
    request_cache = TransactionalCache(cache)
    run_after_commit(session, request_cache.replay_evictions)
    return request_cache


def get_clock() -> Clock:
    return get_default_clock()


def get_credential_provider() -> CredentialProvider:
    return get_auth_service_client()


def get_page_request(
    page: int = Query(0, ge=0, description="Zero-based page number"),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Page size"),
) -> PageRequest:
    return PageRequest(page=page, size=size)


# =========================================================================
# SERVICES
# =========================================================================

def get_user_service(
    user_repository: UserRepository = Depends(get_user_repository),
    card_repository: CardRepository = Depends(get_card_repository),
    cache: CacheBackend = Depends(get_request_cache),
    clock: Clock = Depends(get_clock),
) -> UserService:
    return UserService(user_repository, card_repository, cache, clock)


def get_card_service(
    card_repository: CardRepository = Depends(get_card_repository),
    user_repository: UserRepository = Depends(get_user_repository),
    cache: CacheBackend = Depends(get_request_cache),
    clock: Clock = Depends(get_clock),
) -> CardService:
    return CardService(
        card_repository,
        user_repository,
        cache,
        clock,
        require_future_expiration=get_settings().CARD_REQUIRE_FUTURE_EXPIRATION,
    )


def get_registration_service(
    user_service: UserService = Depends(get_user_service),
    credential_provider: CredentialProvider = Depends(get_credential_provider),
) -> RegistrationService:
    return RegistrationService(user_service, credential_provider)


def get_access_guard(
    card_repository: CardRepository = Depends(get_card_repository),
) -> AccessGuard:
    return AccessGuard(card_repository)
