"""init_db_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19

Schema:
- user: accounts (user/admin) with bcrypt password hashes
- restaurant: catalog rows with the menu embedded as a JSONB list
- reservation: bookings; user_id / restaurant_id are plain columns without
  foreign keys (references are checked only when a reservation is created)
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB, UUID


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create all tables."""

    op.create_table(
        'user',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('hashed_password', sa.String(length=255), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False),
        sa.Column('username', sa.String(length=255), nullable=False),
        sa.Column('phone_number', sa.String(length=32), nullable=False),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)

    op.create_table(
        'restaurant',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('category', sa.String(length=100), nullable=False),
        sa.Column('address', sa.String(length=500), nullable=False),
        sa.Column('phone_number', sa.String(length=32), nullable=False),
        sa.Column('open_time', sa.Time(timezone=False), nullable=False),
        sa.Column('close_time', sa.Time(timezone=False), nullable=False),
        sa.Column('foods', JSONB, nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column(
            'updated_at',
            sa.DateTime(timezone=True),
            server_default=sa.text('now()'),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_restaurant_category'), 'restaurant', ['category'], unique=False)

    op.create_table(
        'reservation',
        sa.Column('id', UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', UUID(as_uuid=True), nullable=False),
        sa.Column('restaurant_id', UUID(as_uuid=True), nullable=False),
        sa.Column('date', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_reservation_user_id'), 'reservation', ['user_id'], unique=False)
    op.create_index(
        op.f('ix_reservation_restaurant_id'), 'reservation', ['restaurant_id'], unique=False
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_index(op.f('ix_reservation_restaurant_id'), table_name='reservation')
    op.drop_index(op.f('ix_reservation_user_id'), table_name='reservation')
    op.drop_table('reservation')
    op.drop_index(op.f('ix_restaurant_category'), table_name='restaurant')
    op.drop_table('restaurant')
    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_table('user')
