"""create workflow tables

Revision ID: 3a1f0c7d2b91
Revises:
Create Date: 2026-10-19 09:12:40.118204

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3a1f0c7d2b91'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('workflow_stages',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organization_id', sa.String(length=64), nullable=False),
        sa.Column('stage_name', sa.String(length=255), nullable=False),
        sa.Column('stage_type', sa.String(length=32), nullable=False),
        sa.Column('sequence_order', sa.Integer(), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('stage_config', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_workflow_stages_id', 'workflow_stages', ['id'])
    op.create_index('ix_workflow_stages_organization_id', 'workflow_stages', ['organization_id'])
    op.create_index('ix_workflow_stages_org_seq', 'workflow_stages', ['organization_id', 'sequence_order'])

    op.create_table('orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organization_id', sa.String(length=64), nullable=False),
        sa.Column('uiorn', sa.String(length=16), nullable=False),
        sa.Column('order_number', sa.String(length=64), nullable=True),
        sa.Column('item_code', sa.String(length=64), nullable=False),
        sa.Column('item_name', sa.String(length=255), nullable=True),
        sa.Column('order_quantity', sa.Float(), nullable=False),
        sa.Column('delivery_date', sa.Date(), nullable=True),
        sa.Column('priority_level', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('customer_info', sa.JSON(), nullable=False),
        sa.Column('specifications', sa.JSON(), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_orders_id', 'orders', ['id'])
    op.create_index('ix_orders_organization_id', 'orders', ['organization_id'])
    op.create_index('ix_orders_uiorn', 'orders', ['uiorn'], unique=True)
    op.create_index('ix_orders_item_code', 'orders', ['item_code'])

    op.create_table('workflow_progress',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organization_id', sa.String(length=64), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('stage_id', sa.Integer(), nullable=False),
        sa.Column('status', sa.String(length=32), nullable=False),
        sa.Column('progress_percentage', sa.Float(), nullable=False),
        sa.Column('started_at', sa.DateTime(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('stage_data', sa.JSON(), nullable=False),
        sa.Column('quality_status', sa.String(length=32), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['stage_id'], ['workflow_stages.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('order_id', 'stage_id', name='uq_progress_order_stage')
    )
    op.create_index('ix_workflow_progress_id', 'workflow_progress', ['id'])
    op.create_index('ix_workflow_progress_organization_id', 'workflow_progress', ['organization_id'])
    op.create_index('ix_workflow_progress_order_id', 'workflow_progress', ['order_id'])
    op.create_index('ix_workflow_progress_stage_id', 'workflow_progress', ['stage_id'])

    op.create_table('bom_master',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organization_id', sa.String(length=64), nullable=False),
        sa.Column('item_code', sa.String(length=64), nullable=False),
        sa.Column('bom_version', sa.String(length=16), nullable=False),
        sa.Column('yield_percentage', sa.Float(), nullable=False),
        sa.Column('scrap_percentage', sa.Float(), nullable=False),
        sa.Column('bom_notes', sa.Text(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('approval_status', sa.String(length=16), nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('organization_id', 'item_code', 'bom_version', name='uq_bom_item_version')
    )
    op.create_index('ix_bom_master_id', 'bom_master', ['id'])
    op.create_index('ix_bom_master_organization_id', 'bom_master', ['organization_id'])
    op.create_index('ix_bom_master_item_code', 'bom_master', ['item_code'])

    op.create_table('bom_components',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organization_id', sa.String(length=64), nullable=False),
        sa.Column('bom_master_id', sa.Integer(), nullable=False),
        sa.Column('line_number', sa.Integer(), nullable=False),
        sa.Column('component_item_code', sa.String(length=64), nullable=False),
        sa.Column('weight_percentage', sa.Float(), nullable=False),
        sa.Column('quantity_ratio', sa.Float(), nullable=False),
        sa.Column('stage_id', sa.Integer(), nullable=True),
        sa.Column('consumption_type', sa.String(length=16), nullable=False),
        sa.Column('is_critical', sa.Boolean(), nullable=False),
        sa.Column('waste_percentage', sa.Float(), nullable=False),
        sa.Column('uom', sa.String(length=16), nullable=False),
        sa.Column('component_notes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['bom_master_id'], ['bom_master.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['stage_id'], ['workflow_stages.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_bom_components_id', 'bom_components', ['id'])
    op.create_index('ix_bom_components_organization_id', 'bom_components', ['organization_id'])
    op.create_index('ix_bom_components_bom_master_id', 'bom_components', ['bom_master_id'])

    op.create_table('quality_checkpoints',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organization_id', sa.String(length=64), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('stage_id', sa.Integer(), nullable=False),
        sa.Column('check_type', sa.String(length=16), nullable=False),
        sa.Column('result', sa.String(length=16), nullable=False),
        sa.Column('inspection_results', sa.JSON(), nullable=False),
        sa.Column('defects_found', sa.JSON(), nullable=False),
        sa.Column('corrective_actions', sa.JSON(), nullable=False),
        sa.Column('remarks', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=True),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['stage_id'], ['workflow_stages.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_quality_checkpoints_id', 'quality_checkpoints', ['id'])
    op.create_index('ix_quality_checkpoints_organization_id', 'quality_checkpoints', ['organization_id'])
    op.create_index('ix_quality_checkpoints_order_id', 'quality_checkpoints', ['order_id'])
    op.create_index('ix_quality_checkpoints_stage_id', 'quality_checkpoints', ['stage_id'])


def downgrade():
    op.drop_table('quality_checkpoints')
    op.drop_table('bom_components')
    op.drop_table('bom_master')
    op.drop_table('workflow_progress')
    op.drop_table('orders')
    op.drop_table('workflow_stages')
