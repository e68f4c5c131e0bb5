"""Create users and card_info tables

Revision ID: 001
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create user management tables"""

    # 1. Create users table
    op.create_table('users',
        sa.Column('id', sa.Uuid(), nullable=False, comment='Unique identifier for each user'),
        sa.Column('name', sa.String(255), nullable=False, comment='Given name'),
        sa.Column('surname', sa.String(255), nullable=True, comment='Family name'),
        sa.Column('birth_date', sa.Date(), nullable=True, comment='Date of birth'),
        sa.Column('email', sa.String(255), nullable=False, comment="User's email address (unique)"),

        sa.PrimaryKeyConstraint('id', name='pk_users'),
        sa.UniqueConstraint('email', name='uq_users_email'),
    )

    # 2. Create card_info table
    op.create_table('card_info',
        sa.Column('id', sa.Uuid(), nullable=False, comment='Unique identifier for each card'),
        sa.Column('user_id', sa.Uuid(), nullable=False, comment='Owning user'),
        sa.Column('number', sa.String(64), nullable=False, comment='Card number (unique)'),
        sa.Column('holder', sa.String(255), nullable=False, comment='Card holder name'),
        sa.Column('expiration_date', sa.Date(), nullable=False, comment='Card expiration date'),

        sa.PrimaryKeyConstraint('id', name='pk_card_info'),
        sa.UniqueConstraint('number', name='uq_card_info_number'),
        sa.ForeignKeyConstraint(
            ['user_id'], ['users.id'],
            name='fk_card_info_user_id_users',
            ondelete='CASCADE'
        ),
    )

    op.create_index('ix_card_info_user_id', 'card_info', ['user_id'])
    op.create_index('ix_card_info_expiration_date', 'card_info', ['expiration_date'])


def downgrade() -> None:
    """Drop user management tables"""
    op.drop_index('ix_card_info_expiration_date', table_name='card_info')
    op.drop_index('ix_card_info_user_id', table_name='card_info')
    op.drop_table('card_info')
    op.drop_table('users')
