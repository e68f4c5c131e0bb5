# 📄 File: marketplace/modules/user_management/application/dto/__init__.py
# 🧭 Purpose (Layman Explanation):
# Defines how users and cards look when they are sent back to a caller.
# 🧪 Purpose (Technical Summary):
# Response DTOs with camelCase aliases and domain to DTO mappers.
# 🔗 Dependencies:
# pydantic
# 🔄 Connected Modules / Calls From:
# Presentation routers
