"""Create payments and notifications tables

Revision ID: 20261017_000002
Revises: 20261017_000001
Create Date: 2026-10-17

Stripe-backed payment requests and per-user in-app notifications.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261017_000002'
down_revision: Union[str, None] = '20261017_000001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the payments and notifications tables."""
    op.create_table(
        'payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('lease_id', sa.Integer(), nullable=True),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('landlord_id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('rent_amount', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('utilities_amount', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('deposit_amount', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('total_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='usd'),
        sa.Column('period', sa.String(length=7), nullable=False),
        sa.Column('type', sa.String(length=20), nullable=False, server_default='rent'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('is_first_payment', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('stripe_payment_intent_id', sa.String(length=255), nullable=True),
        sa.Column('client_secret', sa.String(length=255), nullable=True),
        sa.Column('paid_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['lease_id'], ['leases.id'], name='fk_payments_lease_id', ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['tenant_id'], ['users.id'], name='fk_payments_tenant_id'),
        sa.ForeignKeyConstraint(['landlord_id'], ['users.id'], name='fk_payments_landlord_id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_payments_property_id'),
    )
    op.create_index('ix_payments_lease_id', 'payments', ['lease_id'])
    op.create_index('ix_payments_tenant_id', 'payments', ['tenant_id'])
    op.create_index('ix_payments_landlord_id', 'payments', ['landlord_id'])
    op.create_index('ix_payments_property_id', 'payments', ['property_id'])
    op.create_index('ix_payments_period', 'payments', ['period'])
    op.create_index('ix_payments_status', 'payments', ['status'])
    op.create_index(
        'ix_payments_stripe_payment_intent_id', 'payments', ['stripe_payment_intent_id'], unique=True
    )

    op.create_table(
        'notifications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('related_id', sa.String(length=64), nullable=True),
        sa.Column('related_type', sa.String(length=50), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], name='fk_notifications_user_id', ondelete='CASCADE'),
    )
    op.create_index('ix_notifications_user_id', 'notifications', ['user_id'])
    op.create_index('ix_notifications_is_read', 'notifications', ['is_read'])


def downgrade() -> None:
    """Drop the payments and notifications tables."""
    op.drop_table('notifications')
    op.drop_table('payments')
