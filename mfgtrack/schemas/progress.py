"""Workflow progress schemas"""

from pydantic import BaseModel
from typing import Optional, Dict, Any
from datetime import datetime


class ProgressRead(BaseModel):
    id: int
    organization_id: str
    order_id: int
    stage_id: int
    status: str
    progress_percentage: float
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    stage_data: Dict[str, Any] = {}
    quality_status: str
    notes: Optional[str] = None

    class Config:
        from_attributes = True


class TransitionRequest(BaseModel):
    """Request a status change on a progress record"""
    target_status: str
    notes: Optional[str] = None  # required for hold and resume


class ProgressUpdate(BaseModel):
    """Report work done on a running stage"""
    progress_percentage: float
    stage_data: Optional[Dict[str, Any]] = None
    notes: Optional[str] = None
