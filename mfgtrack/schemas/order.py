"""Order schemas"""

from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List
from datetime import date, datetime


class OrderBase(BaseModel):
    """Order base model"""
    order_number: Optional[str] = None
    item_code: str
    item_name: Optional[str] = None
    order_quantity: float = Field(gt=0)
    delivery_date: Optional[date] = None
    priority_level: int = Field(default=2, ge=1, le=4)  # 1 low .. 4 urgent
    customer_info: Dict[str, Any] = {}
    specifications: Dict[str, Any] = {}


class OrderCreate(OrderBase):
    """Payload for creating an order; the UIORN is generated"""
    pass


class OrderRead(OrderBase):
    """Order as returned by the API"""
    id: int
    organization_id: str
    uiorn: str
    status: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StageSnapshot(BaseModel):
    """One stage line of an order summary"""
    progress_id: int
    stage_id: int
    stage_name: str
    sequence_order: int
    status: str
    progress_percentage: float
    quality_status: str
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None


class OrderSummary(BaseModel):
    order_id: int
    uiorn: str
    status: str
    current_stage: str
    overall_percentage: float
    stages: List[StageSnapshot]


class AdvanceResponse(BaseModel):
    """Result of auto-progression"""
    order_id: int
    stage_name: str
    status: str
    action: str  # "started" | "completed"
    overall_percentage: float
