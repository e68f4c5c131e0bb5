# 📄 File: marketplace/modules/user_management/__init__.py
# 🧭 Purpose (Layman Explanation):
# Everything about people and their payment cards: creating and changing users,
# adding and removing cards, signing up, and who is allowed to do what.
# 🧪 Purpose (Technical Summary):
# User management module laid out in domain, application, infrastructure and presentation layers.
# 🔗 Dependencies:
# marketplace.shared (config, core, infrastructure)
# 🔄 Connected Modules / Calls From:
# marketplace.api.v1.router

"""
User Management Module

Layers:
- domain: models, repository ports, services and the access policy
- application: access guard and response DTOs
- infrastructure: SQLAlchemy repositories and the credential service client
- presentation: FastAPI routers, request schemas and dependency providers
"""
