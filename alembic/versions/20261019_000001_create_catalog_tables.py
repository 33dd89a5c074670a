"""Create catalog tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

Creates the properties, property_images and favorites tables. Images and
favorites are removed by ON DELETE CASCADE when their property goes.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CITIES = ('lisbon', 'porto', 'algarve', 'braga', 'coimbra', 'aveiro', 'funchal', 'faro')
PROPERTY_TYPES = ('apartment', 'house', 'villa')


def upgrade() -> None:
    """Create the catalog tables."""
    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('price', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('city', sa.Enum(*CITIES, name='city'), nullable=False),
        sa.Column('address', sa.Text(), nullable=False),
        sa.Column('latitude', sa.Numeric(precision=10, scale=8), nullable=False),
        sa.Column('longitude', sa.Numeric(precision=11, scale=8), nullable=False),
        sa.Column('bedrooms', sa.Integer(), nullable=False),
        sa.Column('bathrooms', sa.Integer(), nullable=False),
        sa.Column('area_sqm', sa.Numeric(precision=8, scale=2), nullable=False),
        sa.Column('property_type', sa.Enum(*PROPERTY_TYPES, name='property_type'), nullable=False),
        sa.Column('is_featured', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_properties_id', 'properties', ['id'])
    op.create_index('ix_properties_city', 'properties', ['city'])
    op.create_index('ix_properties_created_at', 'properties', ['created_at'])

    op.create_table(
        'property_images',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=False),
        sa.Column('alt_text', sa.Text(), nullable=False, server_default=''),
        sa.Column('is_primary', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('sort_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['property_id'],
            ['properties.id'],
            name='fk_property_images_property_id',
            ondelete='CASCADE'
        ),
    )
    op.create_index('ix_property_images_id', 'property_images', ['id'])
    op.create_index('ix_property_images_property_id', 'property_images', ['property_id'])

    op.create_table(
        'favorites',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('session_id', sa.String(length=255), nullable=False),
        sa.Column('property_id', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(
            ['property_id'],
            ['properties.id'],
            name='fk_favorites_property_id',
            ondelete='CASCADE'
        ),
        sa.UniqueConstraint('session_id', 'property_id', name='_session_property_favorite_uc'),
    )
    op.create_index('ix_favorites_id', 'favorites', ['id'])
    op.create_index('ix_favorites_session_id', 'favorites', ['session_id'])
    op.create_index('ix_favorites_property_id', 'favorites', ['property_id'])


def downgrade() -> None:
    """Drop the catalog tables."""
    op.drop_index('ix_favorites_property_id', table_name='favorites')
    op.drop_index('ix_favorites_session_id', table_name='favorites')
    op.drop_index('ix_favorites_id', table_name='favorites')
    op.drop_table('favorites')

    op.drop_index('ix_property_images_property_id', table_name='property_images')
    op.drop_index('ix_property_images_id', table_name='property_images')
    op.drop_table('property_images')

    op.drop_index('ix_properties_created_at', table_name='properties')
    op.drop_index('ix_properties_city', table_name='properties')
    op.drop_index('ix_properties_id', table_name='properties')
    op.drop_table('properties')

    # Drop the enum types (no-op outside PostgreSQL)
    sa.Enum(name='property_type').drop(op.get_bind(), checkfirst=True)
    sa.Enum(name='city').drop(op.get_bind(), checkfirst=True)
