# 📄 File: marketplace/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Manages the connection to our PostgreSQL database, making sure we can talk to our data storage
# and sharing a pool of connections efficiently without overwhelming the database.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy engine and session factory management with connection pooling
# and a health check used by the readiness endpoint.
#
# 🔗 Dependencies:
# - sqlalchemy (async engine and sessions)
# - marketplace/shared/config/settings.py (database configuration)
# - asyncpg (PostgreSQL async driver)
#
# 🔄 Connected Modules / Calls From:
# - marketplace/shared/infrastructure/database/session.py (session management)
# - marketplace/main.py (startup and shutdown)
# - marketplace/api/v1/router.py (readiness check)

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from marketplace.shared.config.settings import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


class DatabaseConnectionManager:
    """
    Owns the async engine and the session factory built on it.
    """

    def __init__(self):
        self._engine: Optional[AsyncEngine] = None
        self._session_factory: Optional[async_sessionmaker] = None
        self._health_check_query = text("SELECT 1")

    def _build_connection_params(self, url: str) -> Dict[str, Any]:
        """Build SQLAlchemy engine parameters from settings."""
        params: Dict[str, Any] = {
            "url": url,
            "echo": settings.DB_ECHO,
            "pool_pre_ping": True,
        }
        if url.startswith("postgresql"):
            params.update({
                "pool_recycle": settings.DB_POOL_RECYCLE,
                "pool_size": settings.DB_POOL_SIZE,
                "max_overflow": settings.DB_MAX_OVERFLOW,
                "pool_timeout": settings.DB_POOL_TIMEOUT,
                "connect_args": {
                    "server_settings": {"application_name": "marketplace_user_service"},
                    "command_timeout": 60,
                },
            })
        return params

    async def initialize(self, url: Optional[str] = None) -> None:
        """Create the engine and session factory and verify connectivity."""
        if self._engine is not None:
            logger.warning("Database engine already initialized")
            return

        database_url = url or settings.database_url
        logger.info("Initializing database connection pool...")
        self._engine = create_async_engine(**self._build_connection_params(database_url))
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=True,
        )

        try:
            async with self._engine.connect() as conn:
                await conn.execute(self._health_check_query)
        except (SQLAlchemyError, OSError) as e:
            logger.error(f"❌ Database initialization failed: {e}")
            await self._engine.dispose()
            self._engine = None
            self._session_factory = None
            raise

        logger.info("✅ Database connection initialized successfully")

    async def health_check(self) -> Dict[str, Any]:
        """
        Perform database health check and return structured status.
        """
        timestamp = datetime.now(timezone.utc).isoformat()
        if self._engine is None:
            return {"status": "unhealthy", "error": "Database engine not initialized", "timestamp": timestamp}

        try:
            async with self._engine.connect() as conn:
                await conn.execute(self._health_check_query)
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Database health check failed: {e}")
            return {"status": "unhealthy", "error": str(e), "timestamp": timestamp}

        return {"status": "healthy", "timestamp": timestamp}

    async def close(self) -> None:
        """Close database engine and all connections."""
        if self._engine is None:
            logger.warning("Database engine not initialized, nothing to close")
            return

        logger.info("Closing database connection pool...")
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("✅ Database connection closed successfully")

    @property
    def session_factory(self) -> Optional[async_sessionmaker]:
        return self._session_factory


# Global database connection manager instance
db_manager = DatabaseConnectionManager()


async def init_database(url: Optional[str] = None) -> None:
    """Initialize the global database connection manager."""
    await db_manager.initialize(url)


async def close_database() -> None:
    """Close the global database connection manager."""
    await db_manager.close()


async def database_health_check() -> Dict[str, Any]:
    return await db_manager.health_check()
