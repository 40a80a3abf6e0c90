from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import schemas
from ...core import material_flow
from ...database.connection import get_db

router = APIRouter(prefix="/orgs/{organization_id}/progress/{progress_id}/materials", tags=["materials"])


@router.get("/", response_model=List[schemas.StageMaterialRead])
def list_materials(organization_id: str, progress_id: int, direction: Optional[str] = None,
                   db: Session = Depends(get_db)):
    return material_flow.list_materials(db, organization_id, progress_id, direction)


@router.post("/inputs", response_model=schemas.StageMaterialRead, status_code=201)
def record_input(organization_id: str, progress_id: int, material: schemas.StageMaterialCreate,
                 db: Session = Depends(get_db)):
    """Book material consumed by the stage"""
    return material_flow.record_input(db, organization_id, progress_id, material)


@router.post("/outputs", response_model=schemas.StageMaterialRead, status_code=201)
def record_output(organization_id: str, progress_id: int, material: schemas.StageMaterialCreate,
                  db: Session = Depends(get_db)):
    """Book material produced by the stage, waste included"""
    return material_flow.record_output(db, organization_id, progress_id, material)


@router.get("/summary", response_model=schemas.MaterialFlowSummary)
def material_summary(organization_id: str, progress_id: int, db: Session = Depends(get_db)):
    return material_flow.material_flow_summary(db, organization_id, progress_id)
