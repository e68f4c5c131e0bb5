# 📄 File: marketplace/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Groups everything that faces the outside world: the web addresses and the request filters.
# 🧪 Purpose (Technical Summary):
# HTTP layer package: versioned routers and starlette middleware.
# 🔗 Dependencies:
# FastAPI, starlette
# 🔄 Connected Modules / Calls From:
# marketplace.main
