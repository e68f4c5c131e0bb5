# 📄 File: marketplace/modules/user_management/presentation/api/__init__.py
# 🧭 Purpose (Layman Explanation):
# Web endpoints and the shapes of incoming requests.
# 🧪 Purpose (Technical Summary):
# API package for v1 routers and request schemas.
# 🔗 Dependencies:
# FastAPI, pydantic
# 🔄 Connected Modules / Calls From:
# marketplace.api.v1.router
