# 📄 File: marketplace/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Manages database sessions (conversations with the database) so each request
# gets its own clean session that is saved on success and undone on failure.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy session lifecycle with commit/rollback handling and the
# FastAPI dependency that injects one session per request, plus after-commit callbacks.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession)
# - marketplace/shared/infrastructure/database/connection.py (session factory)
#
# 🔄 Connected Modules / Calls From:
# - marketplace/modules/user_management/presentation/dependencies.py (repository providers)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Awaitable, Callable, List

from sqlalchemy import exc
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.shared.core.exceptions import MarketplaceException, RepositoryError
from marketplace.shared.infrastructure.database.connection import db_manager

logger = logging.getLogger(__name__)

AFTER_COMMIT_KEY = "after_commit"


def run_after_commit(session: AsyncSession, callback: Callable[[], Awaitable[None]]) -> None:
    """Register a coroutine function to run once the session's transaction has committed."""
    session.info.setdefault(AFTER_COMMIT_KEY, []).append(callback)


class DatabaseSessionManager:
    """
    Manages database sessions with transaction handling and automatic cleanup.
    """

    @asynccontextmanager
    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Get an async database session with automatic transaction management.

        Domain exceptions roll the transaction back and propagate unchanged.
        Callbacks registered with run_after_commit run after a successful commit
        and are dropped on rollback.

        Yields:
            AsyncSession: Database session

        Raises:
            RepositoryError: If the database fails outside a repository call
        """
        factory = db_manager.session_factory
        if factory is None:
            raise RepositoryError("Session manager not initialized")

        session: AsyncSession = factory()
        callbacks: List[Callable[[], Awaitable[None]]] = []

        try:
            yield session
            await session.commit()
            callbacks = session.info.pop(AFTER_COMMIT_KEY, [])
            logger.debug("Database transaction committed successfully")

        except MarketplaceException:
            await session.rollback()
            raise

        except exc.SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error occurred, transaction rolled back: {e}")
            raise RepositoryError(f"Database operation failed: {e}")

        except Exception:
            await session.rollback()
            raise

        finally:
            await session.close()

        for callback in callbacks:
            await callback()


# Global session manager instance
session_manager = DatabaseSessionManager()


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides database sessions.

    Usage:
        async def get_user_repository(session: AsyncSession = Depends(get_db_session)):
            return SQLAlchemyUserRepository(session)
    """
    async with session_manager.get_session() as session:
        yield session
