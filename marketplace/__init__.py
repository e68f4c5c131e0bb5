# 📄 File: marketplace/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Tells Python this folder holds the user and payment card service and records its version.
#
# 🧪 Purpose (Technical Summary):
# Application package initialization with version and package metadata.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - main.py (application entry point)
# - pyproject.toml (package discovery)

"""
Marketplace User Service

Directory of users and their payment cards with ownership based access control,
Redis caching and two-phase registration against a credential service.
"""

__version__ = "1.0.0"
__title__ = "Marketplace User Service"
__description__ = "User and payment card directory service"

__all__ = [
    "__version__",
    "__title__",
    "__description__",
]
