from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import crud, schemas
from ...core import quality_gate
from ...database.connection import get_db

router = APIRouter(prefix="/orgs/{organization_id}/quality", tags=["quality"])


@router.post("/checkpoints", response_model=schemas.CheckpointRead, status_code=201)
def create_checkpoint(organization_id: str, payload: schemas.CheckpointCreate, db: Session = Depends(get_db)):
    return quality_gate.create_checkpoint(
        db, organization_id, payload.order_id, payload.stage_id, payload.check_type
    )


@router.get("/checkpoints", response_model=List[schemas.CheckpointRead])
def list_checkpoints(organization_id: str, order_id: int, stage_id: int,
                     check_type: Optional[str] = None, db: Session = Depends(get_db)):
    """Checkpoints of an order stage, latest first"""
    return crud.list_checkpoints(db, organization_id, order_id, stage_id, check_type)


@router.post("/checkpoints/{checkpoint_id}/result", response_model=schemas.CheckpointRead)
def record_result(organization_id: str, checkpoint_id: int, payload: schemas.CheckpointResultUpdate,
                  db: Session = Depends(get_db)):
    return quality_gate.record_result(
        db,
        organization_id,
        checkpoint_id,
        payload.result,
        inspection_results=payload.inspection_results,
        defects_found=payload.defects_found,
        corrective_actions=payload.corrective_actions,
        remarks=payload.remarks,
    )


@router.get("/release", response_model=schemas.ReleaseDecision)
def evaluate_release(organization_id: str, order_id: int, stage_id: int, db: Session = Depends(get_db)):
    """Whether the stage output may move to the next stage"""
    can_release, reason = quality_gate.evaluate_release(db, organization_id, order_id, stage_id)
    return schemas.ReleaseDecision(order_id=order_id, stage_id=stage_id, can_release=can_release, reason=reason)
