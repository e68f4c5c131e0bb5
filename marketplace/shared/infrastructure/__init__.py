# 📄 File: marketplace/shared/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# Shared plumbing: database connections, the cache and outgoing HTTP calls.
# 🧪 Purpose (Technical Summary):
# Infrastructure package for database, cache and external API clients.
# 🔗 Dependencies:
# SQLAlchemy, redis, aiohttp
# 🔄 Connected Modules / Calls From:
# Module infrastructure implementations
