# 📄 File: marketplace/modules/user_management/infrastructure/database/__init__.py
# 🧭 Purpose (Layman Explanation):
# Database tables and the code that reads and writes users and cards.
# 🧪 Purpose (Technical Summary):
# ORM models and SQLAlchemy repository implementations.
# 🔗 Dependencies:
# SQLAlchemy (asyncio)
# 🔄 Connected Modules / Calls From:
# Presentation dependencies, migrations
