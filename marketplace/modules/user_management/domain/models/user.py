# 📄 File: marketplace/modules/user_management/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Defines what a "user" is in the directory: their name, surname, birth date and email,
# the things every other part of the service talks about.
# 🧪 Purpose (Technical Summary):
# Pydantic domain model for the User entity with an immutable identity, field update
# semantics and the month/day birthday rule used by the birthday query.
# 🔗 Dependencies:
# pydantic, datetime, uuid
# 🔄 Connected Modules / Calls From:
# user_service.py, registration_service.py, user_repository.py, user_dto.py

from datetime import date
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator


class User(BaseModel):
    """
    User domain model.

    The id is generated at creation and never changes. Email uniqueness is
    enforced by the service and by the storage layer, not by the model.
    """

    model_config = ConfigDict(validate_assignment=True)

    id: UUID = Field(default_factory=uuid4)
    name: str
    surname: Optional[str] = None
    birth_date: Optional[date] = None
    email: str

    @field_validator('email')
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Emails are compared trimmed; case is preserved as entered."""
        v = v.strip()
        if not v:
            raise ValueError('Email is required')
        return v

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError('Name is required')
        return v

    def apply_changes(
        self,
        name: str,
        surname: Optional[str],
        birth_date: Optional[date],
        email: str
    ) -> None:
        """Overwrite every mutable field. The id is left untouched."""
        self.name = name
        self.surname = surname
        self.birth_date = birth_date
        self.email = email

    def has_email(self, email: str) -> bool:
        return self.email == email.strip()

    def has_birthday_on(self, day: date) -> bool:
        """True when month and day match, whatever the year."""
        if self.birth_date is None:
            return False
        return (self.birth_date.month, self.birth_date.day) == (day.month, day.day)


class UserDetails(BaseModel):
    """Mutable user fields as submitted for a create or an update."""

    name: str
    surname: Optional[str] = None
    birth_date: Optional[date] = None
    email: str

    def to_user(self) -> User:
        return User(name=self.name, surname=self.surname, birth_date=self.birth_date, email=self.email)
