# 📄 File: marketplace/modules/user_management/infrastructure/__init__.py
# 🧭 Purpose (Layman Explanation):
# The real storage and network code behind the domain's promises.
# 🧪 Purpose (Technical Summary):
# SQLAlchemy repositories and the credential service client.
# 🔗 Dependencies:
# SQLAlchemy, aiohttp
# 🔄 Connected Modules / Calls From:
# Presentation dependencies
