# 📄 File: marketplace/shared/utils/__init__.py
# 🧭 Purpose (Layman Explanation):
# Small helpers shared by every part of the service.
# 🧪 Purpose (Technical Summary):
# Logging configuration and request context propagation.
# 🔗 Dependencies:
# python-json-logger
# 🔄 Connected Modules / Calls From:
# main lifespan, middleware
