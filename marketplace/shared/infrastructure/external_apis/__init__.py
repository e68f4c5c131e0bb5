# 📄 File: marketplace/shared/infrastructure/external_apis/__init__.py
# 🧭 Purpose (Layman Explanation):
# Common code for calling other web services.
# 🧪 Purpose (Technical Summary):
# aiohttp based APIClient with status to UpstreamError mapping.
# 🔗 Dependencies:
# aiohttp
# 🔄 Connected Modules / Calls From:
# Auth service client
