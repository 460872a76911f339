"""create users, reward_history and pickups tables

Revision ID: 3f1c9a7be204
Revises:
Create Date: 2026-02-02 10:14:37.118204
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1c9a7be204'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum('customer', 'agent', name='userrole')
pickup_status = sa.Enum('scheduled', 'in-progress', 'completed', name='pickup_status_enum')
time_slot = sa.Enum('morning', 'afternoon', 'evening', name='pickup_time_slot_enum')


def upgrade() -> None:
    """Upgrade schema: create users, reward_history and pickups"""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('phone', sa.String(length=32), nullable=False, server_default=''),
        sa.Column('role', user_role, nullable=False),
        sa.Column('vehicle_info', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('rewards', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_items', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_co2_saved', sa.Float(), nullable=False, server_default='0'),
        sa.Column('current_streak', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('total_pickups', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('ix_users_user_id', 'users', ['user_id'], unique=True)
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])

    op.create_table(
        'reward_history',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('user_id', sa.String(length=64), sa.ForeignKey('users.user_id', ondelete='CASCADE'), nullable=False),
        sa.Column('amount', sa.Integer(), nullable=False),
        sa.Column('reason', sa.String(length=255), nullable=False),
        sa.Column('timestamp', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index('ix_reward_history_user_id', 'reward_history', ['user_id'])

    op.create_table(
        'pickups',
        sa.Column('pickup_id', sa.String(length=64), primary_key=True),
        sa.Column('verification_code', sa.String(length=12), nullable=False),
        sa.Column('customer_id', sa.String(length=64), sa.ForeignKey('users.user_id'), nullable=False),
        sa.Column('agent_id', sa.String(length=64), sa.ForeignKey('users.user_id'), nullable=True),
        sa.Column('status', pickup_status, nullable=False),
        sa.Column('date', sa.String(length=10), nullable=False),
        sa.Column('time_slot', time_slot, nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('items', sa.Text(), nullable=False, server_default=''),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('accepted_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rating', sa.Integer(), nullable=True),
        sa.CheckConstraint('rating IS NULL OR (rating >= 1 AND rating <= 5)', name='ck_pickup_rating'),
    )
    op.create_index('ix_pickups_customer_id', 'pickups', ['customer_id'])
    op.create_index('ix_pickups_agent_id', 'pickups', ['agent_id'])


def downgrade() -> None:
    """Downgrade schema: drop pickups, reward_history and users"""
    op.drop_index('ix_pickups_agent_id', table_name='pickups')
    op.drop_index('ix_pickups_customer_id', table_name='pickups')
    op.drop_table('pickups')
    op.drop_index('ix_reward_history_user_id', table_name='reward_history')
    op.drop_table('reward_history')
    op.drop_index('ix_users_role', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_index('ix_users_user_id', table_name='users')
    op.drop_table('users')
    pickup_status.drop(op.get_bind(), checkfirst=True)
    time_slot.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
