# 📄 File: marketplace/modules/user_management/presentation/api/schemas/__init__.py
# 🧭 Purpose (Layman Explanation):
# Checks the data callers send before it reaches the business rules.
# 🧪 Purpose (Technical Summary):
# Pydantic request schemas.
# 🔗 Dependencies:
# pydantic, email-validator
# 🔄 Connected Modules / Calls From:
# Presentation routers
