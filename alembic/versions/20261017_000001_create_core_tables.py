"""Create core tables

Revision ID: 20261017_000001
Revises: None
Create Date: 2026-10-17

Users, properties, leases, applications and maintenance requests.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261017_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
    ]


def upgrade() -> None:
    """Create the core tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=True),
        sa.Column('firebase_uid', sa.String(length=128), nullable=True),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='tenant'),
        sa.Column('admin_id', sa.String(length=64), nullable=True),
        sa.Column('avatar', sa.String(length=500), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_firebase_uid', 'users', ['firebase_uid'], unique=True)

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('landlord_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('address', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=100), nullable=True),
        sa.Column('zip_code', sa.String(length=20), nullable=True),
        sa.Column('property_type', sa.String(length=50), nullable=True),
        sa.Column('bedrooms', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('bathrooms', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('square_feet', sa.Integer(), nullable=True),
        sa.Column('monthly_rent', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('security_deposit', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('amenities', sa.Text(), nullable=True),
        sa.Column('images', sa.Text(), nullable=True),
        sa.Column('utilities_included', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('pet_friendly', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('parking_available', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='available'),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['landlord_id'], ['users.id'], name='fk_properties_landlord_id', ondelete='CASCADE'),
    )
    op.create_index('ix_properties_landlord_id', 'properties', ['landlord_id'])
    op.create_index('ix_properties_city', 'properties', ['city'])
    op.create_index('ix_properties_status', 'properties', ['status'])

    op.create_table(
        'leases',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('landlord_id', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('monthly_rent', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('security_deposit', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('utilities_cost', sa.Numeric(precision=12, scale=2), nullable=False, server_default='0'),
        sa.Column('payment_due_day', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('terms', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('lease_document_url', sa.String(length=500), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_leases_property_id'),
        # NO ACTION on the user keys: SQL Server rejects multiple cascade paths
        sa.ForeignKeyConstraint(['tenant_id'], ['users.id'], name='fk_leases_tenant_id'),
        sa.ForeignKeyConstraint(['landlord_id'], ['users.id'], name='fk_leases_landlord_id'),
    )
    op.create_index('ix_leases_property_id', 'leases', ['property_id'])
    op.create_index('ix_leases_tenant_id', 'leases', ['tenant_id'])
    op.create_index('ix_leases_landlord_id', 'leases', ['landlord_id'])
    op.create_index('ix_leases_status', 'leases', ['status'])

    op.create_table(
        'applications',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('landlord_id', sa.Integer(), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('message', sa.Text(), nullable=True),
        sa.Column('approved_at', sa.DateTime(), nullable=True),
        sa.Column('rejected_at', sa.DateTime(), nullable=True),
        sa.Column('rejection_reason', sa.Text(), nullable=True),
        sa.Column('lease_id', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['tenant_id'], ['users.id'], name='fk_applications_tenant_id'),
        sa.ForeignKeyConstraint(['landlord_id'], ['users.id'], name='fk_applications_landlord_id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_applications_property_id', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['lease_id'], ['leases.id'], name='fk_applications_lease_id'),
    )
    op.create_index('ix_applications_tenant_id', 'applications', ['tenant_id'])
    op.create_index('ix_applications_landlord_id', 'applications', ['landlord_id'])
    op.create_index('ix_applications_property_id', 'applications', ['property_id'])
    op.create_index('ix_applications_status', 'applications', ['status'])

    op.create_table(
        'maintenance_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('landlord_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(length=50), nullable=False, server_default='other'),
        sa.Column('priority', sa.String(length=20), nullable=False, server_default='medium'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('contractor_name', sa.String(length=200), nullable=True),
        sa.Column('contractor_contact', sa.String(length=200), nullable=True),
        sa.Column('estimated_cost', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('actual_cost', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('images', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['property_id'], ['properties.id'], name='fk_maintenance_property_id', ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['tenant_id'], ['users.id'], name='fk_maintenance_tenant_id'),
        sa.ForeignKeyConstraint(['landlord_id'], ['users.id'], name='fk_maintenance_landlord_id'),
    )
    op.create_index('ix_maintenance_requests_property_id', 'maintenance_requests', ['property_id'])
    op.create_index('ix_maintenance_requests_tenant_id', 'maintenance_requests', ['tenant_id'])
    op.create_index('ix_maintenance_requests_landlord_id', 'maintenance_requests', ['landlord_id'])
    op.create_index('ix_maintenance_requests_status', 'maintenance_requests', ['status'])


def downgrade() -> None:
    """Drop the core tables."""
    op.drop_table('maintenance_requests')
    op.drop_table('applications')
    op.drop_table('leases')
    op.drop_table('properties')
    op.drop_table('users')
