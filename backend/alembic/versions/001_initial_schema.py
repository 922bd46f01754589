"""Initial schema: organizations, users, clients, events, catalog, billing and revenue

Revision ID: 001
Revises:
Create Date: 2026-10-05

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create organizations table
    op.create_table(
        'organizations',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    # Create clients table
    op.create_table(
        'clients',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('organization_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_clients_organization_id', 'clients', ['organization_id'])

    # Create user role enum (if not exists)
    op.execute("DO $$ BEGIN CREATE TYPE userrole AS ENUM ('admin', 'employee', 'client'); EXCEPTION WHEN duplicate_object THEN null; END $$;")

    # Create users table
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column('full_name', sa.String(), nullable=False),
        sa.Column('role', postgresql.ENUM('admin', 'employee', 'client', name='userrole', create_type=False), nullable=False),
        sa.Column('organization_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('client_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    # Create event enums
    op.execute("DO $$ BEGIN CREATE TYPE eventstatus AS ENUM ('booked', 'confirmed', 'in_progress', 'completed', 'cancelled'); EXCEPTION WHEN duplicate_object THEN null; END $$;")
    op.execute("DO $$ BEGIN CREATE TYPE guesttype AS ENUM ('adult', 'child'); EXCEPTION WHEN duplicate_object THEN null; END $$;")

    # Create events table
    op.create_table(
        'events',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('organization_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('client_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('client_name', sa.String(), nullable=False),
        sa.Column('event_date', sa.Date(), nullable=True),
        sa.Column('event_time', sa.String(), nullable=True),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('adult_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('child_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('number_of_guests', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('gratuity_percent', sa.Float(), nullable=False, server_default='20'),
        sa.Column('selected_upcharges', sa.JSON(), nullable=False),
        sa.Column('status', postgresql.ENUM('booked', 'confirmed', 'in_progress', 'completed', 'cancelled', name='eventstatus', create_type=False), nullable=False),
        sa.Column('total_revenue', sa.Float(), nullable=True),
        sa.Column('created_by', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['created_by'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_events_org_date', 'events', ['organization_id', 'event_date'])

    op.create_table(
        'event_guests',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('event_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(), nullable=False, server_default=''),
        sa.Column('guest_type', postgresql.ENUM('adult', 'child', name='guesttype', create_type=False), nullable=False),
        sa.Column('proteins', sa.JSON(), nullable=False),
        sa.Column('special_requests', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_event_guests_event_id', 'event_guests', ['event_id'])

    # Create menu and inventory tables
    op.create_table(
        'menu_items',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('organization_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('base_price_per_guest', sa.Float(), nullable=False, server_default='0'),
        sa.Column('min_guests', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_vegetarian', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('is_vegan', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('is_gluten_free', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_menu_items_organization_id', 'menu_items', ['organization_id'])

    op.create_table(
        'inventory_items',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('organization_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('category', sa.String(), nullable=True),
        sa.Column('unit_type', sa.String(), nullable=False, server_default='unit'),
        sa.Column('cost_per_unit', sa.Float(), nullable=False, server_default='0'),
        sa.Column('current_quantity', sa.Float(), nullable=False, server_default='0'),
        sa.Column('minimum_stock', sa.Float(), nullable=False, server_default='0'),
        sa.Column('storage_location', sa.String(), nullable=True),
        sa.Column('expiry_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_inventory_items_organization_id', 'inventory_items', ['organization_id'])

    op.create_table(
        'staff',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('organization_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('position', sa.String(), nullable=False, server_default='server'),
        sa.Column('hourly_rate', sa.Float(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_staff_organization_id', 'staff', ['organization_id'])

    # Create revenue records table
    op.create_table(
        'revenue_records',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('organization_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('event_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('client_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('revenue_date', sa.Date(), nullable=False),
        sa.Column('gross_revenue', sa.Float(), nullable=False, server_default='0'),
        sa.Column('food_costs', sa.Float(), nullable=False, server_default='0'),
        sa.Column('labor_costs', sa.Float(), nullable=False, server_default='0'),
        sa.Column('other_expenses', sa.Float(), nullable=False, server_default='0'),
        sa.Column('net_profit', sa.Float(), nullable=False, server_default='0'),
        sa.Column('tax_amount', sa.Float(), nullable=False, server_default='0'),
        sa.Column('payment_method', sa.String(), nullable=False, server_default='cash'),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('idx_revenue_org_date', 'revenue_records', ['organization_id', 'revenue_date'])

    # Create invoices tables
    op.execute("DO $$ BEGIN CREATE TYPE invoicestatus AS ENUM ('draft', 'sent', 'paid', 'overdue', 'cancelled'); EXCEPTION WHEN duplicate_object THEN null; END $$;")

    op.create_table(
        'invoices',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('organization_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('invoice_number', sa.String(), nullable=False),
        sa.Column('event_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('client_id', postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column('subtotal', sa.Float(), nullable=False, server_default='0'),
        sa.Column('tax', sa.Float(), nullable=False, server_default='0'),
        sa.Column('invoice_amount', sa.Float(), nullable=False, server_default='0'),
        sa.Column('deposit_amount', sa.Float(), nullable=True),
        sa.Column('balance_due', sa.Float(), nullable=True),
        sa.Column('status', postgresql.ENUM('draft', 'sent', 'paid', 'overdue', 'cancelled', name='invoicestatus', create_type=False), nullable=False),
        sa.Column('issued_at', sa.Date(), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('paid_date', sa.Date(), nullable=True),
        sa.Column('payment_terms', sa.String(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['organization_id'], ['organizations.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['event_id'], ['events.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['client_id'], ['clients.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('organization_id', 'invoice_number', name='uq_org_invoice_number')
    )

    op.create_table(
        'invoice_payments',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('invoice_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('amount', sa.Float(), nullable=False),
        sa.Column('payment_method', sa.String(), nullable=False),
        sa.Column('payment_date', sa.Date(), nullable=False),
        sa.Column('reference_number', sa.String(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['invoice_id'], ['invoices.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_invoice_payments_invoice_id', 'invoice_payments', ['invoice_id'])


def downgrade() -> None:
    op.drop_index('ix_invoice_payments_invoice_id', table_name='invoice_payments')
    op.drop_table('invoice_payments')
    op.drop_table('invoices')
    op.execute('DROP TYPE invoicestatus')
    op.drop_index('idx_revenue_org_date', table_name='revenue_records')
    op.drop_table('revenue_records')
    op.drop_index('ix_staff_organization_id', table_name='staff')
    op.drop_table('staff')
    op.drop_index('ix_inventory_items_organization_id', table_name='inventory_items')
    op.drop_table('inventory_items')
    op.drop_index('ix_menu_items_organization_id', table_name='menu_items')
    op.drop_table('menu_items')
    op.drop_index('ix_event_guests_event_id', table_name='event_guests')
    op.drop_table('event_guests')
    op.drop_index('idx_events_org_date', table_name='events')
    op.drop_table('events')
    op.execute('DROP TYPE guesttype')
    op.execute('DROP TYPE eventstatus')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    op.execute('DROP TYPE userrole')
    op.drop_index('ix_clients_organization_id', table_name='clients')
    op.drop_table('clients')
    op.drop_table('organizations')
