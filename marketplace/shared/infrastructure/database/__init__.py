# 📄 File: marketplace/shared/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# Opens and closes database connections and hands out one database session per request.
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy engine manager, session manager and declarative base.
# 🔗 Dependencies:
# SQLAlchemy (asyncio), asyncpg / aiosqlite
# 🔄 Connected Modules / Calls From:
# Repositories, presentation dependencies, migrations, main lifespan
