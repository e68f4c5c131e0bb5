# 📄 File: marketplace/modules/user_management/domain/repositories/user_repository.py
# 🧭 Purpose (Layman Explanation):
# Defines the contract for how to save, find and delete users without saying which database is used
# 🧪 Purpose (Technical Summary):
# Repository interface defining data access operations for User entities following Repository pattern and dependency inversion principle
# 🔗 Dependencies:
# Domain models (User, Page, PageRequest), typing, abc
# 🔄 Connected Modules / Calls From:
# UserService, RegistrationService, SQLAlchemy implementation, test fakes

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional
from uuid import UUID

from ..models.page import Page, PageRequest
from ..models.user import User


class UserRepository(ABC):
    """
    Repository interface for User entity data access operations.

    Implementation Notes:
    - Concrete implementations are in infrastructure layer
    - Methods return domain entities (User), not database models
    - All operations are async for non-blocking I/O
    - The storage layer enforces email uniqueness and reports a violation as ConflictError
    """

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """
        Get user by ID.

        Args:
            user_id: User ID to find

        Returns:
            User entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_email(self, email: str) -> Optional[User]:
        """
        Get user by exact email address.

        Args:
            email: Email address to find

        Returns:
            User entity if found, None otherwise
        """
        pass

    @abstractmethod
    async def exists_by_id(self, user_id: UUID) -> bool:
        """Check whether a user with the given ID exists."""
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """
        Insert or update a user.

        Args:
            user: User entity to persist

        Returns:
            The persisted User entity

        Raises:
            ConflictError: If the email is already used by another user
            RepositoryError: If database operation fails
        """
        pass

    @abstractmethod
    async def delete_by_id(self, user_id: UUID) -> None:
        """Delete a user. Deleting a missing user is a no-op."""
        pass

    @abstractmethod
    async def find_all(self, page: PageRequest) -> Page[User]:
        """
        List users one page at a time.

        Args:
            page: Page number and size

        Returns:
            Page of users with the total count
        """
        pass

    @abstractmethod
    async def find_by_search_term(self, term: str, page: PageRequest) -> Page[User]:
        """
        Case-insensitive substring search over name, surname and email.

        Args:
            term: Text to look for
            page: Page number and size

        Returns:
            Page of matching users with the total count
        """
        pass

    @abstractmethod
    async def find_users_with_birthday_today(self, today: date) -> List[User]:
        """
        Users whose birth month and day equal those of ``today``.

        Args:
            today: Reference date; its year is ignored

        Returns:
            Matching users, possibly empty
        """
        pass
