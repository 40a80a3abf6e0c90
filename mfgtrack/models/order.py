"""Manufacturing order model"""

from sqlalchemy import Column, Integer, String, DateTime, Date, Float, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database.connection import Base


class Order(Base):
    """Manufacturing order tracked through the stage pipeline"""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)
    organization_id = Column(String(64), nullable=False, index=True)
    # human readable tracking code, UIORN{YY}{MM}{NNNN}
    uiorn = Column(String(16), nullable=False, unique=True, index=True)
    order_number = Column(String(64), nullable=True)
    item_code = Column(String(64), nullable=False, index=True)
    item_name = Column(String(255), nullable=True)
    order_quantity = Column(Float, nullable=False)
    delivery_date = Column(Date, nullable=True)
    # 1 low .. 4 urgent
    priority_level = Column(Integer, nullable=False, default=2)
    status = Column(String(32), nullable=False, default="draft")
    customer_info = Column(JSON, nullable=False, default=dict)
    specifications = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    progress = relationship(
        "WorkflowProgress",
        back_populates="order",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
