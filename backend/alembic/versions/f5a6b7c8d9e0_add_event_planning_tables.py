"""add event types, packages, event menus, tasks, milestones and staff assignments

Revision ID: f5a6b7c8d9e0
Revises: e4f5a6b7c8d9
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = 'f5a6b7c8d9e0'
down_revision = 'e4f5a6b7c8d9'
branch_labels = None
depends_on = None


def _id():
    return sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()'))


def _fk(name, target, ondelete, nullable=True):
    return sa.Column(name, postgresql.UUID(as_uuid=True), sa.ForeignKey(target, ondelete=ondelete), nullable=nullable)


def _timestamp(name):
    return sa.Column(name, sa.DateTime(), nullable=False, server_default=sa.text('CURRENT_TIMESTAMP'))


def upgrade():
    op.create_table(
        'event_types',
        _id(),
        _fk('organization_id', 'organizations.id', 'CASCADE', nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('base_price', sa.Float(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        _timestamp('created_at'),
        _timestamp('updated_at'),
    )
    op.create_index('ix_event_types_organization_id', 'event_types', ['organization_id'])
    op.add_column('events', _fk('event_type_id', 'event_types.id', 'SET NULL'))

    op.create_table(
        'packages',
        _id(),
        _fk('organization_id', 'organizations.id', 'CASCADE', nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price_per_guest', sa.Float(), nullable=False, server_default='0'),
        sa.Column('min_guests', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default='true'),
        _timestamp('created_at'),
        _timestamp('updated_at'),
    )
    op.create_index('ix_packages_organization_id', 'packages', ['organization_id'])

    op.create_table(
        'package_items',
        _id(),
        _fk('package_id', 'packages.id', 'CASCADE', nullable=False),
        _fk('menu_item_id', 'menu_items.id', 'CASCADE', nullable=False),
        sa.Column('qty_per_guest', sa.Float(), nullable=False, server_default='1'),
        _timestamp('created_at'),
        sa.UniqueConstraint('package_id', 'menu_item_id', name='uq_package_menu_item'),
    )
    op.create_index('ix_package_items_package_id', 'package_items', ['package_id'])

    op.create_table(
        'event_menu_items',
        _id(),
        _fk('event_id', 'events.id', 'CASCADE', nullable=False),
        _fk('menu_item_id', 'menu_items.id', 'CASCADE'),
        _fk('package_id', 'packages.id', 'CASCADE'),
        sa.Column('quantity', sa.Integer(), nullable=False, server_default='1'),
        sa.Column('per_guest_price', sa.Float(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        _timestamp('created_at'),
        sa.CheckConstraint('(menu_item_id IS NULL) <> (package_id IS NULL)', name='ck_event_menu_item_source'),
    )
    op.create_index('ix_event_menu_items_event_id', 'event_menu_items', ['event_id'])

    op.create_table(
        'event_tasks',
        _id(),
        _fk('event_id', 'events.id', 'CASCADE', nullable=False),
        sa.Column('task_name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        _fk('assigned_staff_id', 'staff.id', 'SET NULL'),
        sa.Column('due_time', sa.DateTime(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('priority', sa.String(), nullable=False, server_default='medium'),
        sa.Column('task_category', sa.String(), nullable=False, server_default='general'),
        sa.Column('estimated_duration', sa.Integer(), nullable=True),
        _timestamp('created_at'),
        _timestamp('updated_at'),
    )
    op.create_index('ix_event_tasks_event_id', 'event_tasks', ['event_id'])

    op.create_table(
        'event_milestones',
        _id(),
        _fk('event_id', 'events.id', 'CASCADE', nullable=False),
        sa.Column('milestone_name', sa.String(), nullable=False),
        sa.Column('milestone_type', sa.String(), nullable=False, server_default='checkpoint'),
        sa.Column('scheduled_time', sa.DateTime(), nullable=False),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        _fk('assigned_staff_id', 'staff.id', 'SET NULL'),
        sa.Column('notes', sa.Text(), nullable=True),
        _timestamp('created_at'),
    )
    op.create_index('ix_event_milestones_event_id', 'event_milestones', ['event_id'])

    op.create_table(
        'staff_assignments',
        _id(),
        _fk('event_id', 'events.id', 'CASCADE', nullable=False),
        _fk('staff_id', 'staff.id', 'CASCADE', nullable=False),
        sa.Column('role_for_event', sa.String(), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=True),
        sa.Column('end_time', sa.DateTime(), nullable=True),
        sa.Column('hourly_rate', sa.Float(), nullable=True),
        _timestamp('created_at'),
        sa.UniqueConstraint('event_id', 'staff_id', name='uq_event_staff'),
    )
    op.create_index('ix_staff_assignments_event_id', 'staff_assignments', ['event_id'])
    op.create_index('ix_staff_assignments_staff_id', 'staff_assignments', ['staff_id'])


def downgrade():
    op.drop_table('staff_assignments')
    op.drop_table('event_milestones')
    op.drop_table('event_tasks')
    op.drop_table('event_menu_items')
    op.drop_table('package_items')
    op.drop_table('packages')
    op.drop_column('events', 'event_type_id')
    op.drop_table('event_types')
