"""Order x stage progress model"""

from sqlalchemy import Column, Integer, String, DateTime, Float, JSON, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database.connection import Base


class WorkflowProgress(Base):
    """Status and completion of one stage for one order"""
    __tablename__ = "workflow_progress"
    __table_args__ = (UniqueConstraint("order_id", "stage_id", name="uq_progress_order_stage"),)

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(String(64), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    # back-reference only, stages are never owned by progress rows
    stage_id = Column(Integer, ForeignKey("workflow_stages.id"), nullable=False, index=True)
    status = Column(String(32), nullable=False, default="pending")
    progress_percentage = Column(Float, nullable=False, default=0.0)
    started_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    stage_data = Column(JSON, nullable=False, default=dict)
    quality_status = Column(String(32), nullable=False, default="pending")
    notes = Column(Text, nullable=True)
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    order = relationship("Order", back_populates="progress")
    stage = relationship("Stage")
