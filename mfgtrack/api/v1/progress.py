from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ... import schemas
from ...core import workflow
from ...database.connection import get_db

router = APIRouter(prefix="/orgs/{organization_id}/progress", tags=["progress"])


@router.get("/{progress_id}", response_model=schemas.ProgressRead)
def get_progress(organization_id: str, progress_id: int, db: Session = Depends(get_db)):
    return workflow.get_progress(db, organization_id, progress_id)


@router.post("/{progress_id}/transition", response_model=schemas.ProgressRead)
def transition_progress(organization_id: str, progress_id: int, payload: schemas.TransitionRequest,
                        db: Session = Depends(get_db)):
    """Change the status of a stage following the workflow state machine"""
    return workflow.transition(db, organization_id, progress_id, payload.target_status, payload.notes)


@router.patch("/{progress_id}", response_model=schemas.ProgressRead)
def update_progress(organization_id: str, progress_id: int, payload: schemas.ProgressUpdate,
                    db: Session = Depends(get_db)):
    """Report the completion percentage of a running stage"""
    return workflow.update_progress(
        db, organization_id, progress_id, payload.progress_percentage, payload.stage_data, payload.notes
    )
