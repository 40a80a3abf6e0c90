"""Stage material flow schemas"""

from pydantic import BaseModel, Field
from typing import Optional, Dict, Any
from datetime import datetime


class StageMaterialCreate(BaseModel):
    """Material consumed or produced by a running stage"""
    material_type: str
    material_category: str
    item_code: str
    planned_quantity: float = Field(default=0.0, ge=0)
    actual_quantity: float = Field(ge=0)
    unit_cost: float = Field(default=0.0, ge=0)
    waste_category: Optional[str] = None  # required for waste_material outputs
    waste_reason: Optional[str] = None
    lot_number: Optional[str] = None
    material_properties: Dict[str, Any] = {}


class StageMaterialRead(StageMaterialCreate):
    id: int
    organization_id: str
    order_id: int
    stage_id: int
    progress_id: int
    direction: str
    total_cost: float
    yield_percentage: Optional[float] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MaterialFlowSummary(BaseModel):
    """Cost and efficiency of one order stage"""
    progress_id: int
    input_quantity: float
    input_cost: float
    output_quantity: float
    waste_quantity: float
    output_cost: float
    yield_percentage: float
    waste_percentage: float
