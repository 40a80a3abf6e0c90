"""Workflow stage model"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, JSON, Index
from sqlalchemy.sql import func
from ..database.connection import Base


class Stage(Base):
    """Production stage in an organization's pipeline"""
    __tablename__ = "workflow_stages"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(String(64), nullable=False, index=True)
    stage_name = Column(String(255), nullable=False)
    stage_type = Column(String(32), nullable=False)  # one of StageType
    # unique per organization among active stages; enforced by the stage catalog
    sequence_order = Column(Integer, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    # {"material_categories": [...]}
    stage_config = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, server_default=func.now())


Index("ix_workflow_stages_org_seq", Stage.organization_id, Stage.sequence_order)
