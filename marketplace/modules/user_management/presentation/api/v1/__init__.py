# 📄 File: marketplace/modules/user_management/presentation/api/v1/__init__.py
# 🧭 Purpose (Layman Explanation):
# Version 1 endpoints for users, cards and registration.
# 🧪 Purpose (Technical Summary):
# users_router, cards_router and registration_router.
# 🔗 Dependencies:
# FastAPI
# 🔄 Connected Modules / Calls From:
# marketplace.api.v1.router
