"""Stage material data access"""

from sqlalchemy.orm import Session
from ..models import StageMaterial


def add_material(db: Session, organization_id: str, progress, values: dict):
    """Stage a material row for a progress record; the caller commits"""
    db_material = StageMaterial(
        organization_id=organization_id,
        order_id=progress.order_id,
        stage_id=progress.stage_id,
        progress_id=progress.id,
        **values,
    )
    db.add(db_material)
    db.flush()
    return db_material


def list_materials(db: Session, organization_id: str, progress_id: int, direction: str = None):
    """Material rows of a progress record in recording order"""
    query = db.query(StageMaterial).filter(
        StageMaterial.organization_id == organization_id,
        StageMaterial.progress_id == progress_id,
    )
    if direction:
        query = query.filter(StageMaterial.direction == direction)
    return query.order_by(StageMaterial.id).all()
