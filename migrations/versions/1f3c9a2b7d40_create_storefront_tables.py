"""create_storefront_tables

Revision ID: 1f3c9a2b7d40
Revises:
Create Date: 2026-10-19 10:12:31.408112

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '1f3c9a2b7d40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        'categories',
        sa.Column('id', sa.UUID(as_uuid=True), primary_key=True),
        sa.Column('slug', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_categories_slug', 'categories', ['slug'], unique=True)

    op.create_table(
        'offers',
        sa.Column('id', sa.UUID(as_uuid=True), primary_key=True),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('discount_percent', sa.Float(), nullable=False, comment='Discount applied by the offer'),
        sa.Column('starts_at', sa.DateTime(timezone=True), nullable=True, comment='Start of the offer window'),
        sa.Column('ends_at', sa.DateTime(timezone=True), nullable=True, comment='End of the offer window'),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table(
        'products',
        sa.Column('id', sa.UUID(as_uuid=True), primary_key=True),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('slug', sa.String(), nullable=False, comment='URL-safe name plus a uniqueness token'),
        sa.Column('category_id', sa.UUID(as_uuid=True), sa.ForeignKey('categories.id'), nullable=False),
        sa.Column('offer_id', sa.UUID(as_uuid=True), sa.ForeignKey('offers.id', ondelete='SET NULL'), nullable=True),
        sa.Column('price', sa.Float(), nullable=False),
        sa.Column('discount_percent', sa.Float(), nullable=False),
        sa.Column('main_image_url', sa.String(), nullable=False),
        sa.Column('main_image_asset_id', sa.String(), nullable=False),
        sa.Column('gallery_images', JSON, nullable=False, comment='Ordered list of {url, asset_id}'),
        sa.Column('sizes', JSON, nullable=False),
        sa.Column('colors', JSON, nullable=False),
        sa.Column('add_ons', JSON, nullable=False),
        sa.Column('features', JSON, nullable=False),
        sa.Column('specifications', JSON, nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('about', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index('ix_products_name', 'products', ['name'])
    op.create_index('ix_products_slug', 'products', ['slug'], unique=True)
    op.create_index('ix_products_is_active', 'products', ['is_active'])
    op.create_index('ix_products_created_at', 'products', ['created_at'])

    # product_id is not a foreign key: reviews outlive deleted products
    op.create_table(
        'reviews',
        sa.Column('id', sa.UUID(as_uuid=True), primary_key=True),
        sa.Column('product_id', sa.UUID(as_uuid=True), nullable=False),
        sa.Column('user_name', sa.String(), nullable=False),
        sa.Column('rating', sa.Integer(), nullable=False),
        sa.Column('comment', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint('rating >= 1 AND rating <= 5', name='ck_reviews_rating_range'),
    )
    op.create_index('ix_reviews_product_id', 'reviews', ['product_id'])


def downgrade() -> None:
    op.drop_index('ix_reviews_product_id', table_name='reviews')
    op.drop_table('reviews')
    op.drop_index('ix_products_created_at', table_name='products')
    op.drop_index('ix_products_is_active', table_name='products')
    op.drop_index('ix_products_slug', table_name='products')
    op.drop_index('ix_products_name', table_name='products')
    op.drop_table('products')
    op.drop_table('offers')
    op.drop_index('ix_categories_slug', table_name='categories')
    op.drop_table('categories')
