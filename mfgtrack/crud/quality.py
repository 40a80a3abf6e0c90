"""Quality checkpoint data access"""

from sqlalchemy.orm import Session
from ..models import QualityCheckpoint


def add_checkpoint(db: Session, organization_id: str, order_id: int, stage_id: int,
                   check_type: str, remarks: str = None):
    """Stage a pending checkpoint; the caller commits"""
    db_cp = QualityCheckpoint(
        organization_id=organization_id,
        order_id=order_id,
        stage_id=stage_id,
        check_type=check_type,
        result="pending",
        inspection_results={},
        defects_found=[],
        corrective_actions=[],
        remarks=remarks,
    )
    db.add(db_cp)
    db.flush()
    return db_cp


def get_checkpoint(db: Session, organization_id: str, checkpoint_id: int):
    return db.query(QualityCheckpoint).filter(
        QualityCheckpoint.organization_id == organization_id,
        QualityCheckpoint.id == checkpoint_id,
    ).first()


def list_checkpoints(db: Session, organization_id: str, order_id: int, stage_id: int, check_type: str = None):
    """Checkpoints of an order stage, latest first"""
    query = db.query(QualityCheckpoint).filter(
        QualityCheckpoint.organization_id == organization_id,
        QualityCheckpoint.order_id == order_id,
        QualityCheckpoint.stage_id == stage_id,
    )
    if check_type:
        query = query.filter(QualityCheckpoint.check_type == check_type)
    return query.order_by(QualityCheckpoint.id.desc()).all()
