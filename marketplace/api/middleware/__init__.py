# 📄 File: marketplace/api/middleware/__init__.py
# 🧭 Purpose (Layman Explanation):
# Filters every request passes through: request numbering and timing, caller identification and the error safety net.
# 🧪 Purpose (Technical Summary):
# BaseHTTPMiddleware implementations registered by the application factory.
# 🔗 Dependencies:
# starlette, marketplace.shared
# 🔄 Connected Modules / Calls From:
# marketplace.main
