# 📄 File: marketplace/modules/__init__.py
# 🧭 Purpose (Layman Explanation):
# Holds the feature modules of the service.
# 🧪 Purpose (Technical Summary):
# Feature module namespace (user_management).
# 🔗 Dependencies:
# None
# 🔄 Connected Modules / Calls From:
# marketplace.api.v1.router
