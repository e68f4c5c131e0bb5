# 📄 File: marketplace/shared/infrastructure/cache/__init__.py
# 🧭 Purpose (Layman Explanation):
# The short-term memory for repeated lookups.
# 🧪 Purpose (Technical Summary):
# CacheBackend contract with Redis and no-op implementations.
# 🔗 Dependencies:
# redis.asyncio
# 🔄 Connected Modules / Calls From:
# UserService, CardService, presentation dependencies
