"""Stage schemas"""

from pydantic import BaseModel
from typing import Optional, Dict, Any
from datetime import datetime


class StageBase(BaseModel):
    """Stage base model"""
    stage_name: str
    # validated by the stage catalog so a bad type is reported like other rule violations
    stage_type: str
    sequence_order: int


class StageCreate(StageBase):
    """Payload for creating a stage"""
    stage_config: Optional[Dict[str, Any]] = None


class StageRead(StageBase):
    """Stage as returned by the API"""
    id: int
    organization_id: str
    is_active: bool
    stage_config: Dict[str, Any] = {}
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class StageSequenceUpdate(BaseModel):
    sequence_order: int


class StageActiveUpdate(BaseModel):
    is_active: bool
