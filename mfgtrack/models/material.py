"""Stage material flow model"""

from sqlalchemy import Column, Integer, String, DateTime, Float, JSON, ForeignKey, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database.connection import Base


class StageMaterial(Base):
    """Material consumed (input) or produced (output) while an order stage runs"""
    __tablename__ = "stage_materials"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(String(64), nullable=False, index=True)
    order_id = Column(Integer, ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    stage_id = Column(Integer, ForeignKey("workflow_stages.id"), nullable=False, index=True)
    progress_id = Column(Integer, ForeignKey("workflow_progress.id", ondelete="CASCADE"), nullable=False, index=True)
    direction = Column(String(8), nullable=False)  # input | output
    # MaterialInputType for inputs, MaterialOutputType for outputs
    material_type = Column(String(32), nullable=False)
    # one of the stage's configured material categories
    material_category = Column(String(64), nullable=False)
    item_code = Column(String(64), nullable=False)
    planned_quantity = Column(Float, nullable=False, default=0.0)
    actual_quantity = Column(Float, nullable=False, default=0.0)
    unit_cost = Column(Float, nullable=False, default=0.0)
    total_cost = Column(Float, nullable=False, default=0.0)  # actual_quantity x unit_cost
    # outputs only: actual / planned x 100
    yield_percentage = Column(Float, nullable=True)
    waste_category = Column(String(64), nullable=True)
    waste_reason = Column(Text, nullable=True)
    lot_number = Column(String(64), nullable=True)
    material_properties = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, server_default=func.now())

    progress = relationship("WorkflowProgress")
