"""Quality checkpoint model"""

from sqlalchemy import Column, Integer, String, DateTime, JSON, ForeignKey, Text
from sqlalchemy.sql import func
from ..database.connection import Base


class QualityCheckpoint(Base):
    """Inspection attached to an order stage, before or after execution"""
    __tablename__ = "quality_checkpoints"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(String(64), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    stage_id = Column(Integer, ForeignKey("workflow_stages.id"), nullable=False, index=True)
    check_type = Column(String(16), nullable=False)  # pre_stage | post_stage
    result = Column(String(16), nullable=False, default="pending")
    inspection_results = Column(JSON, nullable=False, default=dict)
    defects_found = Column(JSON, nullable=False, default=list)
    corrective_actions = Column(JSON, nullable=False, default=list)
    remarks = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
