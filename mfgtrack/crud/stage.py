"""Stage data access"""

from sqlalchemy.orm import Session
from ..models import Stage


def get_stage(db: Session, organization_id: str, stage_id: int):
    """Get a stage by id within an organization"""
    return db.query(Stage).filter(
        Stage.organization_id == organization_id,
        Stage.id == stage_id,
    ).first()


def list_stages(db: Session, organization_id: str, active_only: bool = False):
    """List stages ordered by sequence order"""
    query = db.query(Stage).filter(Stage.organization_id == organization_id)
    if active_only:
        query = query.filter(Stage.is_active.is_(True))
    return query.order_by(Stage.sequence_order, Stage.id).all()


def find_active_by_sequence(db: Session, organization_id: str, sequence_order: int, exclude_id: int = None):
    """Return the active stage holding a sequence order, if any"""
    query = db.query(Stage).filter(
        Stage.organization_id == organization_id,
        Stage.is_active.is_(True),
        Stage.sequence_order == sequence_order,
    )
    if exclude_id is not None:
        query = query.filter(Stage.id != exclude_id)
    return query.first()


def add_stage(db: Session, organization_id: str, stage_name: str, stage_type: str,
              sequence_order: int, stage_config: dict, is_active: bool = True):
    """Stage a new row in the session; the caller commits"""
    db_stage = Stage(
        organization_id=organization_id,
        stage_name=stage_name,
        stage_type=stage_type,
        sequence_order=sequence_order,
        is_active=is_active,
        stage_config=stage_config,
    )
    db.add(db_stage)
    db.flush()
    return db_stage
