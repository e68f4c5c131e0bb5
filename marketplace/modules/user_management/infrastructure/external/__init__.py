# 📄 File: marketplace/modules/user_management/infrastructure/external/__init__.py
# 🧭 Purpose (Layman Explanation):
# Talks to the separate login service.
# 🧪 Purpose (Technical Summary):
# CredentialProvider implementation over APIClient.
# 🔗 Dependencies:
# aiohttp
# 🔄 Connected Modules / Calls From:
# Presentation dependencies, main lifespan
