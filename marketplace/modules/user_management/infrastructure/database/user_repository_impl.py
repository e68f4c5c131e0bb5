# 📄 File: marketplace/modules/user_management/infrastructure/database/user_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# This file does the actual database work for users: saving them, finding them by id or email,
# searching by name and finding whose birthday is today.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy async implementation of UserRepository with domain/model mapping, paginated
# listing and search, month/day birthday matching and unique-constraint to ConflictError mapping.
#
# 🔗 Dependencies:
# - marketplace.modules.user_management.domain.repositories.user_repository (interface)
# - marketplace.modules.user_management.infrastructure.database.models (UserModel)
# - SQLAlchemy async session and query operations
#
# 🔄 Connected Modules / Calls From:
# - presentation/dependencies.py (repository provider)
# - UserService, CardService, RegistrationService (through the interface)

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, extract, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from marketplace.modules.user_management.domain.models.page import Page, PageRequest
from marketplace.modules.user_management.domain.models.user import User
from marketplace.modules.user_management.domain.repositories.user_repository import UserRepository
from marketplace.modules.user_management.infrastructure.database.models import CardInfoModel, UserModel
from marketplace.shared.core.exceptions import ConflictError, RepositoryError

logger = logging.getLogger(__name__)


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the term is matched literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SQLAlchemyUserRepository(UserRepository):
    """
    SQLAlchemy implementation of the UserRepository interface.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize the user repository.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        model = await self._session.get(UserModel, user_id)
        return self._model_to_domain(model) if model else None

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self._session.execute(
            select(UserModel).where(UserModel.email == email.strip())
        )
        model = result.scalar_one_or_none()
        return self._model_to_domain(model) if model else None

    async def exists_by_id(self, user_id: UUID) -> bool:
        result = await self._session.execute(
            select(UserModel.id).where(UserModel.id == user_id)
        )
        return result.first() is not None

    async def save(self, user: User) -> User:
        """
        Insert a new user or update the stored row with the same id.

        Raises:
            ConflictError: If the email is already used by another row
            RepositoryError: For other database errors
        """
        try:
            model = await self._session.get(UserModel, user.id)
            if model is None:
                model = self._domain_to_model(user)
                self._session.add(model)
            else:
                model.name = user.name
                model.surname = user.surname
                model.birth_date = user.birth_date
                model.email = user.email
            await self._session.flush()

        except IntegrityError as e:
            await self._session.rollback()
            logger.warning(f"User save failed - email already exists: {user.email}")
            raise ConflictError(
                f"User with email {user.email} already exists.",
                resource_type="user",
                conflict_field="email",
                existing_value=user.email
            ) from e

        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Database error during user save: {e}")
            raise RepositoryError("Failed to save user", operation="save", entity="user") from e

        return self._model_to_domain(model)

    async def delete_by_id(self, user_id: UUID) -> None:
        try:
            # Cards first: SQLite does not enforce ON DELETE CASCADE by default
            await self._session.execute(delete(CardInfoModel).where(CardInfoModel.user_id == user_id))
            await self._session.execute(delete(UserModel).where(UserModel.id == user_id))
            await self._session.flush()
        except SQLAlchemyError as e:
            await self._session.rollback()
            logger.error(f"Database error during user deletion: {e}")
            raise RepositoryError("Failed to delete user", operation="delete", entity="user") from e

    async def find_all(self, page: PageRequest) -> Page[User]:
        return await self._paged(select(UserModel), page)

    async def find_by_search_term(self, term: str, page: PageRequest) -> Page[User]:
        pattern = f"%{escape_like(term.strip())}%"
        query = select(UserModel).where(
            or_(
                UserModel.name.ilike(pattern, escape="\\"),
                UserModel.surname.ilike(pattern, escape="\\"),
                UserModel.email.ilike(pattern, escape="\\"),
            )
        )
        return await self._paged(query, page)

    async def find_users_with_birthday_today(self, today: date) -> List[User]:
        result = await self._session.execute(
            select(UserModel)
            .where(
                UserModel.birth_date.is_not(None),
                extract("month", UserModel.birth_date) == today.month,
                extract("day", UserModel.birth_date) == today.day,
            )
            .order_by(UserModel.name, UserModel.id)
        )
        return [self._model_to_domain(model) for model in result.scalars().all()]

    async def _paged(self, query, page: PageRequest) -> Page[User]:
        total = await self._session.scalar(
            select(func.count()).select_from(query.order_by(None).subquery())
        )
        result = await self._session.execute(
            query.order_by(UserModel.name, UserModel.id).offset(page.offset).limit(page.size)
        )
        content = [self._model_to_domain(model) for model in result.scalars().all()]
        return Page.of(content, total or 0, page)

    def _domain_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            name=user.name,
            surname=user.surname,
            birth_date=user.birth_date,
            email=user.email,
        )

    def _model_to_domain(self, user_model: UserModel) -> User:
        return User(
            id=user_model.id,
            name=user_model.name,
            surname=user_model.surname,
            birth_date=user_model.birth_date,
            email=user_model.email,
        )
