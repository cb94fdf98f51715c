"""initial catalog schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 09:12:40.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '0001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')


def timestamps():
    return [
        sa.Column('created_at', sa.TIMESTAMP(timezone=False), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.TIMESTAMP(timezone=False), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        'categories',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        *timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name'),
    )

    op.create_table(
        'subcategories',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('category_id', sa.String(length=36), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(['category_id'], ['categories.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('category_id', 'name', name='uq_subcategories_category_id_name'),
    )
    op.create_index('ix_subcategories_category_id', 'subcategories', ['category_id'])

    op.create_table(
        'doors',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('subcategory_id', sa.String(length=36), nullable=False),
        sa.Column('category_name', sa.String(), nullable=False),
        sa.Column('subcategory_name', sa.String(), nullable=False),
        sa.Column('material', sa.String(), nullable=False),
        sa.Column('height', sa.String(), nullable=False),
        sa.Column('widths', JSON_TYPE, nullable=False),
        sa.Column('base_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(['subcategory_id'], ['subcategories.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('subcategory_id', 'name', name='uq_doors_subcategory_id_name'),
    )
    op.create_index('ix_doors_subcategory_id', 'doors', ['subcategory_id'])
    op.create_index('ix_doors_material', 'doors', ['material'])

    op.create_table(
        'panel_models',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('code', sa.String(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('material', sa.String(), nullable=False),
        sa.Column('collection', sa.String(), nullable=False),
        sa.Column('height', sa.String(), nullable=False),
        sa.Column('widths', JSON_TYPE, nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(), nullable=True),
        *timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('code'),
    )
    op.create_index('ix_panel_models_material', 'panel_models', ['material'])
    op.create_index('ix_panel_models_collection', 'panel_models', ['collection'])

    op.create_table(
        'suppliers',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.Column('location', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'supplier_panels',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('supplier_id', sa.String(length=36), nullable=False),
        sa.Column('panel_model_id', sa.String(length=36), nullable=False),
        sa.Column('base_price', sa.Numeric(precision=10, scale=2), nullable=False),
        sa.Column('price_per_width', JSON_TYPE, nullable=True),
        sa.Column('lead_time', sa.String(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *timestamps(),
        sa.ForeignKeyConstraint(['supplier_id'], ['suppliers.id']),
        sa.ForeignKeyConstraint(['panel_model_id'], ['panel_models.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('supplier_id', 'panel_model_id', name='uq_supplier_panels_supplier_id_panel_model_id'),
    )
    op.create_index('ix_supplier_panels_supplier_id', 'supplier_panels', ['supplier_id'])
    op.create_index('ix_supplier_panels_panel_model_id', 'supplier_panels', ['panel_model_id'])


def downgrade() -> None:
    op.drop_index('ix_supplier_panels_panel_model_id', table_name='supplier_panels')
    op.drop_index('ix_supplier_panels_supplier_id', table_name='supplier_panels')
    op.drop_table('supplier_panels')
    op.drop_table('suppliers')
    op.drop_index('ix_panel_models_collection', table_name='panel_models')
    op.drop_index('ix_panel_models_material', table_name='panel_models')
    op.drop_table('panel_models')
    op.drop_index('ix_doors_material', table_name='doors')
    op.drop_index('ix_doors_subcategory_id', table_name='doors')
    op.drop_table('doors')
    op.drop_index('ix_subcategories_category_id', table_name='subcategories')
    op.drop_table('subcategories')
    op.drop_table('categories')
