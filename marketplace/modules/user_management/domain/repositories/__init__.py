# 📄 File: marketplace/modules/user_management/domain/repositories/__init__.py
# 🧭 Purpose (Layman Explanation):
# The promises the storage layer makes: find, save and delete users and cards.
# 🧪 Purpose (Technical Summary):
# Abstract repository ports for users and cards.
# 🔗 Dependencies:
# abc
# 🔄 Connected Modules / Calls From:
# Domain services, SQLAlchemy implementations, test fakes
