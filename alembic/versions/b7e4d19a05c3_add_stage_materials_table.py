"""add stage_materials table

Revision ID: b7e4d19a05c3
Revises: 3a1f0c7d2b91
Create Date: 2026-10-21 15:40:07.532810

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = 'b7e4d19a05c3'
down_revision = '3a1f0c7d2b91'
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('stage_materials',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organization_id', sa.String(length=64), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('stage_id', sa.Integer(), nullable=False),
        sa.Column('progress_id', sa.Integer(), nullable=False),
        sa.Column('direction', sa.String(length=8), nullable=False),
        sa.Column('material_type', sa.String(length=32), nullable=False),
        sa.Column('material_category', sa.String(length=64), nullable=False),
        sa.Column('item_code', sa.String(length=64), nullable=False),
        sa.Column('planned_quantity', sa.Float(), nullable=False),
        sa.Column('actual_quantity', sa.Float(), nullable=False),
        sa.Column('unit_cost', sa.Float(), nullable=False),
        sa.Column('total_cost', sa.Float(), nullable=False),
        sa.Column('yield_percentage', sa.Float(), nullable=True),
        sa.Column('waste_category', sa.String(length=64), nullable=True),
        sa.Column('waste_reason', sa.Text(), nullable=True),
        sa.Column('lot_number', sa.String(length=64), nullable=True),
        sa.Column('material_properties', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['stage_id'], ['workflow_stages.id'], ),
        sa.ForeignKeyConstraint(['progress_id'], ['workflow_progress.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_stage_materials_id', 'stage_materials', ['id'])
    op.create_index('ix_stage_materials_organization_id', 'stage_materials', ['organization_id'])
    op.create_index('ix_stage_materials_order_id', 'stage_materials', ['order_id'])
    op.create_index('ix_stage_materials_stage_id', 'stage_materials', ['stage_id'])
    op.create_index('ix_stage_materials_progress_id', 'stage_materials', ['progress_id'])


def downgrade():
    op.drop_table('stage_materials')
