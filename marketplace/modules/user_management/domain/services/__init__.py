# 📄 File: marketplace/modules/user_management/domain/services/__init__.py
# 🧭 Purpose (Layman Explanation):
# The business rules for users, cards, registration and permissions.
# 🧪 Purpose (Technical Summary):
# UserService, CardService, RegistrationService and the access policy.
# 🔗 Dependencies:
# Domain models and repository ports
# 🔄 Connected Modules / Calls From:
# Presentation dependencies and routers
