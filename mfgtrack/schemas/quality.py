"""Quality checkpoint schemas"""

from pydantic import BaseModel
from typing import Optional, Dict, Any, List
from datetime import datetime


class CheckpointCreate(BaseModel):
    order_id: int
    stage_id: int
    check_type: str = "pre_stage"


class CheckpointRead(BaseModel):
    id: int
    organization_id: str
    order_id: int
    stage_id: int
    check_type: str
    result: str
    inspection_results: Dict[str, Any] = {}
    defects_found: List[str] = []
    corrective_actions: List[str] = []
    remarks: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class CheckpointResultUpdate(BaseModel):
    """Inspector verdict for a checkpoint"""
    result: str  # passed | failed | in_review
    inspection_results: Optional[Dict[str, Any]] = None
    defects_found: Optional[List[str]] = None
    corrective_actions: Optional[List[str]] = None
    remarks: Optional[str] = None


class ReleaseDecision(BaseModel):
    order_id: int
    stage_id: int
    can_release: bool
    reason: str
