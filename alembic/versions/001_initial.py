"""Initial migration

Revision ID: 001
Revises:
Create Date: 2024-01-01 00:00:00.000000

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
    # Create time_slots table
    op.create_table(
        'time_slots',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('time', sa.Time(), nullable=False),
        sa.Column('is_taken', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.UniqueConstraint('date', 'time', name='uq_time_slots_date_time'),
    )

    # Create reservations table
    op.create_table(
        'reservations',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('phone', sa.String(32), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('time_slot_id', sa.Integer(), sa.ForeignKey('time_slots.id'), nullable=False, unique=True),
        sa.Column('cancellation_token', sa.String(64), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )

    op.create_index(
        'ix_reservations_cancellation_token',
        'reservations',
        ['cancellation_token'],
        unique=True,
    )


def downgrade() -> None:
    op.drop_index('ix_reservations_cancellation_token', table_name='reservations')
    op.drop_table('reservations')
    op.drop_table('time_slots')
