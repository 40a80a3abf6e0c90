"""BOM schemas

Component weights are intentionally left unconstrained here: the composition
validator reports every weight problem together with the other violations.
"""

from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class BOMComponentCreate(BaseModel):
    component_item_code: str
    weight_percentage: float
    stage_id: Optional[int] = None
    consumption_type: str = "direct"
    is_critical: bool = False
    waste_percentage: float = Field(default=0.0, ge=0, le=100)
    uom: str = "KG"
    component_notes: Optional[str] = None


class BOMCreate(BaseModel):
    """Candidate BOM for a finished item"""
    item_code: str
    components: List[BOMComponentCreate] = []
    yield_percentage: float = Field(default=100.0, gt=0, le=100)
    scrap_percentage: float = Field(default=0.0, ge=0, le=100)
    bom_notes: Optional[str] = None


class BOMComponentRead(BOMComponentCreate):
    id: int
    line_number: int
    quantity_ratio: float

    class Config:
        from_attributes = True


class BOMRead(BaseModel):
    id: int
    organization_id: str
    item_code: str
    bom_version: str
    yield_percentage: float
    scrap_percentage: float
    bom_notes: Optional[str] = None
    is_active: bool
    approval_status: str
    created_at: Optional[datetime] = None
    components: List[BOMComponentRead] = []

    class Config:
        from_attributes = True


class BOMValidationResult(BaseModel):
    valid: bool
    total_weight_percentage: float
    errors: List[str] = []


class BOMExplodeRequest(BaseModel):
    quantity: float = Field(gt=0)


class ExplosionLine(BaseModel):
    component_item_code: str
    weight_percentage: float
    quantity_ratio: float
    net_quantity: float
    waste_percentage: float
    gross_quantity: float
    stage_id: Optional[int] = None
    consumption_type: str
    is_critical: bool
    uom: str
