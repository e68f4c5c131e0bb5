# 📄 File: marketplace/modules/user_management/presentation/api/schemas/registration_schemas.py
# 🧭 Purpose (Layman Explanation):
# The sign-up form: the usual user details plus the login and password the person wants.
# 🧪 Purpose (Technical Summary):
# Registration request schema extending UserRequest with credential fields.
# 🔗 Dependencies:
# pydantic, user_schemas.UserRequest
# 🔄 Connected Modules / Calls From:
# presentation/api/v1/registration.py

from pydantic import Field, SecretStr

from .user_schemas import UserRequest


class RegistrationRequest(UserRequest):
    """User details plus the credentials to create in the credential service."""

    login: str = Field(..., min_length=1, max_length=255, description="Requested login")
    password: SecretStr = Field(..., min_length=1, max_length=255, description="Plain password")
