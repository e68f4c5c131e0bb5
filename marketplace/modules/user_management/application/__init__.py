# 📄 File: marketplace/modules/user_management/application/__init__.py
# 🧭 Purpose (Layman Explanation):
# The layer that sits between web requests and business rules: permission checks and response shapes.
# 🧪 Purpose (Technical Summary):
# Access guard and DTO mappers.
# 🔗 Dependencies:
# pydantic, domain layer
# 🔄 Connected Modules / Calls From:
# Presentation routers
