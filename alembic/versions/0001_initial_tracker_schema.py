"""initial tracker schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19 09:12:40.118203

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'employees',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('username', sa.String(), nullable=False),
        sa.Column('password', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False, server_default='employee'),
        sa.Column('company', sa.String(), nullable=False, server_default='N/A'),
        sa.Column('manager', sa.String(), nullable=False, server_default='N/A'),
        sa.Column('work_type', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index('ix_employees_id', 'employees', ['id'])
    op.create_index('ix_employees_username', 'employees', ['username'], unique=True)

    op.create_table(
        'clock_logs',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('employees.id'), nullable=False),
        sa.Column('user_name', sa.String(), nullable=True),
        sa.Column('action', sa.String(), nullable=False),
        sa.Column('time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('work_type', sa.String(), nullable=True),
        sa.Column('ip_address', sa.String(), nullable=True),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('geolocation', sa.JSON(), nullable=True),
        sa.Column('duration', sa.String(), nullable=True),
    )
    op.create_index('ix_clock_logs_id', 'clock_logs', ['id'])
    op.create_index('ix_clock_logs_user_id', 'clock_logs', ['user_id'])
    op.create_index('ix_clock_logs_time', 'clock_logs', ['time'])

    op.create_table(
        'active_sessions',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('employees.id'), nullable=False),
        sa.Column('clock_in_time', sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint('user_id', name='uq_active_sessions_user'),
    )
    op.create_index('ix_active_sessions_id', 'active_sessions', ['id'])


def downgrade() -> None:
    op.drop_table('active_sessions')
    op.drop_table('clock_logs')
    op.drop_table('employees')
