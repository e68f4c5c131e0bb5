# 📄 File: marketplace/modules/user_management/presentation/__init__.py
# 🧭 Purpose (Layman Explanation):
# The web-facing side of the user and card features.
# 🧪 Purpose (Technical Summary):
# Routers, request schemas and dependency providers.
# 🔗 Dependencies:
# FastAPI
# 🔄 Connected Modules / Calls From:
# marketplace.api.v1.router
