# 📄 File: marketplace/modules/user_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# This file defines how users and their payment cards are stored in the database tables.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for the users and card_info tables. Unique constraints on
# users.email and card_info.number are the authoritative guard for concurrent creates.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - marketplace.shared.infrastructure.database.base (declarative base)
#
# 🔄 Connected Modules / Calls From:
# - user_repository_impl.py and card_repository_impl.py (CRUD operations)
# - migrations/env.py (target metadata)

"""
SQLAlchemy Models for User Management

Models:
- UserModel: users table
- CardInfoModel: card_info table, many cards per user
"""

from uuid import uuid4

from sqlalchemy import Column, Date, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship

from marketplace.shared.infrastructure.database.base import Base


class UserModel(Base):
    """SQLAlchemy model for a directory user."""

    __tablename__ = "users"

    id = Column(
        Uuid,
        primary_key=True,
        default=uuid4,
        nullable=False,
        comment="Unique identifier for each user"
    )
    name = Column(String(255), nullable=False, comment="Given name")
    surname = Column(String(255), nullable=True, comment="Family name")
    birth_date = Column(Date, nullable=True, comment="Date of birth")
    email = Column(
        String(255),
        unique=True,
        nullable=False,
        comment="User's email address (unique)"
    )

    cards = relationship(
        "CardInfoModel",
        back_populates="user",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email})>"


class CardInfoModel(Base):
    """SQLAlchemy model for a payment card."""

    __tablename__ = "card_info"

    id = Column(
        Uuid,
        primary_key=True,
        default=uuid4,
        nullable=False,
        comment="Unique identifier for each card"
    )
    user_id = Column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="Owning user"
    )
    number = Column(String(64), unique=True, nullable=False, comment="Card number (unique)")
    holder = Column(String(255), nullable=False, comment="Card holder name")
    expiration_date = Column(Date, nullable=False, index=True, comment="Card expiration date")

    user = relationship("UserModel", back_populates="cards")

    def __repr__(self) -> str:
        return f"<CardInfoModel(id={self.id}, user_id={self.user_id})>"
