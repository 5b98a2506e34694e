"""create users, properties, enquiries and pages

Revision ID: 7c1d2e9a5b10
Revises:
Create Date: 2026-10-19
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '7c1d2e9a5b10'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=False),
        sa.Column('phone', sa.String(), nullable=True),
        sa.Column('hashed_password', sa.String(), nullable=False),
        sa.Column('role', sa.String(), nullable=False, server_default='user'),
        sa.Column('status', sa.String(), nullable=False, server_default='active'),
        *_timestamps(),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)
    op.create_index('ix_users_role', 'users', ['role'])
    op.create_index('ix_users_status', 'users', ['status'])
    op.create_index('idx_user_role_status', 'users', ['role', 'status'])

    op.create_table(
        'properties',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('price', sa.Numeric(14, 2), nullable=False),
        sa.Column('property_type', sa.String(), nullable=False),
        sa.Column('status', sa.String(), nullable=False, server_default='draft'),
        sa.Column('location', sa.String(), nullable=False),
        sa.Column('city', sa.String(), nullable=True),
        sa.Column('area', sa.Float(), nullable=True),
        sa.Column('bedrooms', sa.Integer(), nullable=True),
        sa.Column('bathrooms', sa.Integer(), nullable=True),
        sa.Column('features', sa.JSON(), nullable=False),
        sa.Column('description', sa.String(), nullable=True),
        sa.Column('images', sa.JSON(), nullable=False),
        sa.Column('cover_image', sa.String(), nullable=True),
        sa.Column('premium', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('owner_contact', sa.String(), nullable=False),
        sa.Column('created_by', sa.String(), sa.ForeignKey('users.id', ondelete='SET NULL'), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_properties_slug', 'properties', ['slug'], unique=True)
    op.create_index('ix_properties_property_type', 'properties', ['property_type'])
    op.create_index('ix_properties_status', 'properties', ['status'])
    op.create_index('ix_properties_city', 'properties', ['city'])
    op.create_index('ix_properties_created_by', 'properties', ['created_by'])
    op.create_index('idx_property_status_created', 'properties', ['status', 'created_at'])
    op.create_index('idx_property_status_city', 'properties', ['status', 'city'])

    op.create_table(
        'enquiries',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('email', sa.String(), nullable=True),
        sa.Column('phone', sa.String(), nullable=False),
        sa.Column('message', sa.String(), nullable=False),
        sa.Column('property_id', sa.String(), sa.ForeignKey('properties.id', ondelete='SET NULL'), nullable=True),
        sa.Column('status', sa.String(), nullable=False, server_default='new'),
        *_timestamps(),
    )
    op.create_index('ix_enquiries_property_id', 'enquiries', ['property_id'])
    op.create_index('ix_enquiries_status', 'enquiries', ['status'])
    op.create_index('idx_enquiry_status_created', 'enquiries', ['status', 'created_at'])

    op.create_table(
        'pages',
        sa.Column('id', sa.String(), primary_key=True),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False, server_default=''),
        sa.Column('meta_title', sa.String(), nullable=True),
        sa.Column('meta_description', sa.String(), nullable=True),
        *_timestamps(),
    )
    op.create_index('ix_pages_slug', 'pages', ['slug'], unique=True)


def downgrade() -> None:
    op.drop_table('pages')
    op.drop_table('enquiries')
    op.drop_table('properties')
    op.drop_table('users')
