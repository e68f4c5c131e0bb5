# 📄 File: marketplace/shared/__init__.py
#
# 🧭 Purpose (Layman Explanation):
# Marks the 'shared' folder as a package of common tools every feature can use,
# like settings, database connections, the cache and logging.
#
# 🧪 Purpose (Technical Summary):
# Shared kernel package for configuration, infrastructure and cross-cutting concerns.
#
# 🔗 Dependencies:
# - Python packaging system
#
# 🔄 Connected Modules / Calls From:
# - All application modules importing shared utilities

"""
Shared Kernel - Common Utilities and Infrastructure

- Configuration management
- Database and caching infrastructure
- Security (JWT principals) and the clock
- Logging utilities
"""

__all__ = []
