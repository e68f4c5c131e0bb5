# 📄 File: marketplace/modules/user_management/domain/__init__.py
# 🧭 Purpose (Layman Explanation):
# The core business rules for users and cards, written without any web or database details.
# 🧪 Purpose (Technical Summary):
# Domain layer: entities, repository interfaces, domain services and the access policy.
# 🔗 Dependencies:
# pydantic, marketplace.shared.core
# 🔄 Connected Modules / Calls From:
# Application layer, Infrastructure layer, Presentation layer

"""
User Management Domain Layer

Domain Models:
- User, UserDetails: user entity and its submitted fields
- CardInfo, CardDetails: payment card entity and its submitted fields
- UserWithCards: user read model with cards
- Page, PageRequest: pagination

Business Rules Enforced:
- Email uniqueness
- Card number uniqueness across owners
- Birth dates in the past, card expiration in the future (configurable)
- Self, admin and owner-or-admin access rules
"""
