# 📄 File: marketplace/shared/infrastructure/database/base.py
#
# 🧭 Purpose (Layman Explanation):
# The common starting point for every database table definition, so all tables
# share the same naming rules for keys and constraints.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy 2 DeclarativeBase with a constraint naming convention shared by
# the ORM models and the Alembic migrations.
#
# 🔗 Dependencies:
# - sqlalchemy.orm.DeclarativeBase
#
# 🔄 Connected Modules / Calls From:
# - marketplace/modules/user_management/infrastructure/database/models.py
# - migrations/env.py (target metadata)

from sqlalchemy import MetaData
from sqlalchemy.orm import DeclarativeBase

# Naming convention for database constraints
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s"
}

metadata = MetaData(naming_convention=convention)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.
    """
    metadata = metadata
