"""Bill of materials models"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, Float, ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database.connection import Base


class BOMMaster(Base):
    """Versioned recipe for a finished item"""
    __tablename__ = "bom_master"
    __table_args__ = (UniqueConstraint("organization_id", "item_code", "bom_version", name="uq_bom_item_version"),)

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(String(64), nullable=False, index=True)
    item_code = Column(String(64), nullable=False, index=True)
    bom_version = Column(String(16), nullable=False)  # "1.0", "1.1", ...
    yield_percentage = Column(Float, nullable=False, default=100.0)
    scrap_percentage = Column(Float, nullable=False, default=0.0)
    bom_notes = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=False)
    approval_status = Column(String(16), nullable=False, default="draft")
    created_at = Column(DateTime, server_default=func.now())

    components = relationship(
        "BOMComponent",
        back_populates="bom",
        cascade="all, delete-orphan",
        order_by="BOMComponent.line_number",
    )


class BOMComponent(Base):
    """Raw material line of a BOM, expressed as a weight percentage"""
    __tablename__ = "bom_components"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(String(64), nullable=False, index=True)
    bom_master_id = Column(Integer, ForeignKey("bom_master.id", ondelete="CASCADE"), nullable=False, index=True)
    line_number = Column(Integer, nullable=False)
    component_item_code = Column(String(64), nullable=False)
    weight_percentage = Column(Float, nullable=False)
    # fraction of the finished weight (weight_percentage / 100)
    quantity_ratio = Column(Float, nullable=False)
    stage_id = Column(Integer, ForeignKey("workflow_stages.id"), nullable=True)
    consumption_type = Column(String(16), nullable=False, default="direct")
    is_critical = Column(Boolean, nullable=False, default=False)
    waste_percentage = Column(Float, nullable=False, default=0.0)
    uom = Column(String(16), nullable=False, default="KG")
    component_notes = Column(Text, nullable=True)

    bom = relationship("BOMMaster", back_populates="components")
