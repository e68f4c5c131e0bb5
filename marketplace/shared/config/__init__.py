# 📄 File: marketplace/shared/config/__init__.py
# 🧭 Purpose (Layman Explanation):
# Settings for the whole service, read from environment variables, plus the Redis connection setup.
# 🧪 Purpose (Technical Summary):
# pydantic-settings Settings and Redis client/cache key configuration.
# 🔗 Dependencies:
# pydantic-settings, redis
# 🔄 Connected Modules / Calls From:
# Every layer (get_settings), cache backend, health checks
