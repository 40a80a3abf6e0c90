from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import schemas
from ...core import stage_catalog
from ...database.connection import get_db

router = APIRouter(prefix="/orgs/{organization_id}/stages", tags=["stages"])


@router.get("/", response_model=List[schemas.StageRead])
def list_stages(organization_id: str, include_inactive: bool = False, db: Session = Depends(get_db)):
    """List stages in sequence order (active only by default)"""
    return stage_catalog.list_stages(db, organization_id, include_inactive=include_inactive)


@router.post("/", response_model=schemas.StageRead, status_code=201)
def create_stage(organization_id: str, stage: schemas.StageCreate, db: Session = Depends(get_db)):
    return stage_catalog.create_stage(
        db, organization_id, stage.stage_name, stage.stage_type, stage.sequence_order, stage.stage_config
    )


@router.post("/seed", response_model=List[schemas.StageRead])
def seed_stages(organization_id: str, db: Session = Depends(get_db)):
    """Create the default five-stage pipeline if the organization has none"""
    return stage_catalog.seed_default_stages(db, organization_id)


@router.patch("/{stage_id}/sequence", response_model=schemas.StageRead)
def reorder_stage(organization_id: str, stage_id: int, payload: schemas.StageSequenceUpdate,
                  db: Session = Depends(get_db)):
    return stage_catalog.reorder_stage(db, organization_id, stage_id, payload.sequence_order)


@router.patch("/{stage_id}/active", response_model=schemas.StageRead)
def set_stage_active(organization_id: str, stage_id: int, payload: schemas.StageActiveUpdate,
                     db: Session = Depends(get_db)):
    return stage_catalog.set_stage_active(db, organization_id, stage_id, payload.is_active)
