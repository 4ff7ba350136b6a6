"""Create products table with live product_code index

Revision ID: 3c1f9a2e7b40
Revises:
Create Date: 2026-10-19 09:12:44.201933

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c1f9a2e7b40'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'products',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('product_code', sa.String(length=100), nullable=True),
        sa.Column('product_name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('price', sa.Numeric(10, 2), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('category', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index('ix_products_id', 'products', ['id'])
    op.create_index('ix_products_product_name', 'products', ['product_name'])
    op.create_index('ix_products_category', 'products', ['category'])
    op.create_index('ix_products_deleted_at', 'products', ['deleted_at'])

    # Soft-deleted rows keep their code, so uniqueness only covers live rows
    op.create_index(
        'ix_products_product_code_live',
        'products',
        ['product_code'],
        unique=True,
        postgresql_where=sa.text('deleted_at IS NULL'),
        sqlite_where=sa.text('deleted_at IS NULL'),
    )


def downgrade() -> None:
    op.drop_index('ix_products_product_code_live', table_name='products')
    op.drop_index('ix_products_deleted_at', table_name='products')
    op.drop_index('ix_products_category', table_name='products')
    op.drop_index('ix_products_product_name', table_name='products')
    op.drop_index('ix_products_id', table_name='products')
    op.drop_table('products')
