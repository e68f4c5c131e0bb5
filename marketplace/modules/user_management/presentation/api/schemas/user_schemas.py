# 📄 File: marketplace/modules/user_management/presentation/api/schemas/user_schemas.py
# 🧭 Purpose (Layman Explanation):
# Checks that the user information sent to the API makes sense (a name is given, the email looks
# like an email, nothing is too long) before the service ever sees it.
# 🧪 Purpose (Technical Summary):
# Pydantic request schemas for user create/update with length limits and email validation.
# Wire names are camelCase (birthDate) and snake_case is accepted too.
# 🔗 Dependencies:
# pydantic (EmailStr requires email-validator), domain UserDetails
# 🔄 Connected Modules / Calls From:
# presentation/api/v1/users.py, registration_schemas.py

"""
User Management API Schemas

Request Schemas:
- UserRequest: body of POST /users and PUT /users/{id}
"""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from pydantic.alias_generators import to_camel

from marketplace.modules.user_management.domain.models.user import UserDetails


class UserRequest(BaseModel):
    """
    User create/update request.

    The birth date must be in the past; that rule is checked by the service
    against the service clock.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        json_schema_extra={
            "example": {
                "name": "Ada",
                "surname": "Lovelace",
                "birthDate": "1990-12-10",
                "email": "ada@example.com"
            }
        },
    )

    name: str = Field(..., min_length=1, max_length=255, description="Given name")
    surname: Optional[str] = Field(default=None, max_length=255, description="Family name")
    birth_date: Optional[date] = Field(default=None, description="Date of birth (past)")
    email: EmailStr = Field(..., max_length=255, description="Email address")

    @field_validator('surname')
    @classmethod
    def empty_surname_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    def to_details(self) -> UserDetails:
        return UserDetails(
            name=self.name,
            surname=self.surname,
            birth_date=self.birth_date,
            email=str(self.email),
        )
